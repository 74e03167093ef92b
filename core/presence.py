"""
HandPresence — debounce for the "hand present" flag.

The tracker refreshes slower than the render loop and returns nothing
for repeated frames, so a single empty tick means little. Loss is only
declared once the hand has been missing for more than `lost_after`
consecutive ticks; any frame with a hand re-acquires immediately.
"""
from __future__ import annotations
from typing import Optional

from domain.enums import PresenceChange
from domain.models import HandFrame


class HandPresence:
    """
    Parameters
    ----------
    lost_after : int
        Consecutive missing ticks tolerated before declaring the hand lost.
    """

    def __init__(self, lost_after: int = 30) -> None:
        self._lost_after = lost_after
        self._missing    = 0
        self._detected   = False

    # ------------------------------------------------------------------
    def update(self, hand: Optional[HandFrame]) -> Optional[PresenceChange]:
        """
        Feed one tick. Returns ACQUIRED / LOST on an edge, None otherwise.
        """
        if hand is not None:
            self._missing = 0
            if not self._detected:
                self._detected = True
                return PresenceChange.ACQUIRED
            return None

        self._missing += 1
        if self._detected and self._missing > self._lost_after:
            self._detected = False
            return PresenceChange.LOST
        return None

    @property
    def detected(self) -> bool:
        return self._detected

    @property
    def missing_frames(self) -> int:
        return self._missing

    def reset(self) -> None:
        self._missing  = 0
        self._detected = False
