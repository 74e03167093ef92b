"""
Abstract base class for all pose predicates.

Every gesture must:
  - implement measure(hand) → float (detect compares it to the threshold)
  - declare its NAME class attribute

Gestures are stateless: they look at one HandFrame and nothing else.
Temporal filtering (presence debounce, serve gating) lives in core/.
"""
from __future__ import annotations
from abc import ABC, abstractmethod

from domain.models import HandFrame


class Gesture(ABC):
    """Base class for all gesture predicates."""

    # Override in subclasses for logging / registration
    NAME: str = "UNNAMED_GESTURE"

    def __init__(self, threshold: float) -> None:
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    @abstractmethod
    def measure(self, hand: HandFrame) -> float:
        """
        Return the distance this gesture compares against its threshold
        (normalised camera units).
        """

    def detect(self, hand: HandFrame) -> bool:
        """
        True iff the measured distance is strictly below the threshold.
        A value exactly at the threshold does not trigger.
        """
        return self.measure(hand) < self._threshold

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.NAME!r} threshold={self._threshold}>"
