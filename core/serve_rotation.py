"""
Win detection and the serve rotation rule.

Below deuce each server keeps the serve for `serves_per_turn` points;
once both scores reach the deuce threshold the serve alternates every
point. The consecutive-serve counter is reset whenever the server changes.
"""
from __future__ import annotations

from domain.enums import Side
from domain.models import Scoreboard, ServeRotationState


def is_match_won(scores: Scoreboard, winning_score: int = 11, win_margin: int = 2) -> bool:
    p, o = scores.as_tuple()
    return max(p, o) >= winning_score and abs(p - o) >= win_margin


def is_deuce(scores: Scoreboard, threshold: int = 10) -> bool:
    return scores.player >= threshold and scores.opponent >= threshold


class ServeRotation:
    """
    Parameters
    ----------
    serves_per_turn : int
        Consecutive serves before the serve passes over (outside deuce).
    deuce_threshold : int
        Score both sides must reach for the serve to alternate every point.
    """

    def __init__(self, serves_per_turn: int = 2, deuce_threshold: int = 10) -> None:
        self._per_turn = serves_per_turn
        self._deuce    = deuce_threshold
        self._state    = ServeRotationState()

    @property
    def server(self) -> Side:
        return self._state.server

    @property
    def state(self) -> ServeRotationState:
        return self._state

    def reset(self, first_server: Side = Side.PLAYER) -> None:
        self._state = ServeRotationState(server=first_server, serves=0)

    def record_point(self, scores: Scoreboard) -> bool:
        """
        Count the serve just played against the post-point scores.
        Returns True when the serve passes to the other side.
        """
        self._state.serves += 1
        if is_deuce(scores, self._deuce) or self._state.serves >= self._per_turn:
            self._state.server = self._state.server.other
            self._state.serves = 0
            return True
        return False
