"""
InputMapper — hand position → player paddle x.
"""
from __future__ import annotations

from domain.models import HandFrame, TableState
from utils.constants import INDEX_TIP
from utils.geometry import camera_to_field_x, clamp, lerp


class InputMapper:
    """
    Follows one landmark (the index fingertip by default), mirrors it into
    field space and eases the paddle toward it.

    Parameters
    ----------
    field_width : float
    paddle_half_width : float
    smoothing : float
        Fraction of the remaining distance covered per tick.
    landmark : int
        Landmark index driving the paddle.
    """

    def __init__(
        self,
        field_width: float,
        paddle_half_width: float,
        smoothing: float = 0.2,
        landmark: int = INDEX_TIP,
    ) -> None:
        self._width     = field_width
        self._half      = paddle_half_width
        self._smoothing = smoothing
        self._landmark  = landmark

    def target_x(self, hand: HandFrame) -> float:
        return camera_to_field_x(hand[self._landmark], self._width)

    def clamp(self, x: float) -> float:
        return clamp(x, self._half, self._width - self._half)

    def update(self, table: TableState, hand: HandFrame) -> float:
        """Smooth toward the hand, clamp inside the walls, store and return."""
        moved = lerp(table.player_x, self.target_x(hand), self._smoothing)
        table.player_x = self.clamp(moved)
        return table.player_x
