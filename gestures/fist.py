"""
FistGesture — closed hand.

All four non-thumb fingertips pulled in toward the wrist. Averaging the
four distances keeps one loosely curled finger from breaking the pose.
"""
from __future__ import annotations

from domain.models import HandFrame
from gestures.base import Gesture
from utils.constants import FINGERTIPS, WRIST
from utils.geometry import dist


class FistGesture(Gesture):
    NAME = "FIST"

    def __init__(self, threshold: float = 0.08) -> None:
        super().__init__(threshold)

    def measure(self, hand: HandFrame) -> float:
        wrist = hand[WRIST]
        return sum(dist(hand[tip], wrist) for tip in FINGERTIPS) / len(FINGERTIPS)
