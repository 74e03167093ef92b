"""
GestureClassifier — turns one frame's landmarks into boolean signals.

Usage
-----
classifier = GestureClassifier(fist_threshold=0.08, bend_threshold=0.06)
signals    = classifier.classify(hand)     # hand may be None
"""
from __future__ import annotations
from typing import Optional

from domain.models import GestureSignals, HandFrame
from gestures.fist import FistGesture
from gestures.index_bend import IndexBendGesture


class GestureClassifier:
    """
    Evaluates every pose predicate on the same frame.

    Parameters
    ----------
    fist_threshold : float
        Mean fingertip → wrist distance below which the hand is a fist.
    bend_threshold : float
        Index tip → index MCP distance below which the index is bent.
    """

    def __init__(self, fist_threshold: float = 0.08, bend_threshold: float = 0.06) -> None:
        self._fist       = FistGesture(fist_threshold)
        self._index_bend = IndexBendGesture(bend_threshold)

    def classify(self, hand: Optional[HandFrame]) -> GestureSignals:
        """
        No hand → every predicate is False. Whether the hand is *present*
        over time is tracked separately by HandPresence.
        """
        if hand is None:
            return GestureSignals()
        return GestureSignals(
            detected=True,
            is_fist=self._fist.detect(hand),
            index_bent=self._index_bend.detect(hand),
        )
