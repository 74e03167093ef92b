"""
IndexBendGesture — index finger curled, used as the serve trigger.
"""
from __future__ import annotations

from domain.models import HandFrame
from gestures.base import Gesture
from utils.constants import INDEX_MCP, INDEX_TIP
from utils.geometry import dist


class IndexBendGesture(Gesture):
    NAME = "INDEX_BENT"

    def __init__(self, threshold: float = 0.06) -> None:
        super().__init__(threshold)

    def measure(self, hand: HandFrame) -> float:
        return dist(hand[INDEX_TIP], hand[INDEX_MCP])
