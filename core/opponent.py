"""
OpponentController — the computer paddle at the top of the table.

It aims at the ball plus an error offset. The offset is drawn only when a
serve is set up (`serve_error_range`) and when the player returns the
ball (`rally_error_range`). In between it stays fixed.
"""
from __future__ import annotations
import random
from typing import Optional

from domain.enums import MatchPhase, Side
from domain.models import BallState, TableState
from utils.geometry import clamp, step_toward


class OpponentController:
    """
    Parameters
    ----------
    field_width : float
    paddle_half_width : float
    speed : float
        Maximum paddle travel per tick.
    serve_error_range : float
        Width of the uniform error range drawn at serve setup.
    rally_error_range : float
        Width of the uniform error range drawn after a player hit.
    rng : random.Random
    """

    def __init__(
        self,
        field_width: float,
        paddle_half_width: float,
        speed: float = 7.5,
        serve_error_range: float = 80.0,
        rally_error_range: float = 50.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._width       = field_width
        self._half        = paddle_half_width
        self._speed       = speed
        self._serve_range = serve_error_range
        self._rally_range = rally_error_range
        self._rng         = rng or random.Random()

        self._error:        float = 0.0
        self._serve_anchor: float = field_width / 2

    # ------------------------------------------------------------------
    # Error offset events
    # ------------------------------------------------------------------
    def prepare_serve(self, ball: BallState) -> None:
        """New serve phase: remember where the ball was set up, re-draw error."""
        self._serve_anchor = ball.x
        self._error = self._draw(self._serve_range)

    def on_player_contact(self) -> None:
        """The player just returned the ball: misjudge it once."""
        self._error = self._draw(self._rally_range)

    # ------------------------------------------------------------------
    def target_x(self, table: TableState, phase: MatchPhase, server: Side) -> float:
        ball = table.ball
        if phase is MatchPhase.ACTIVE and ball.dy > 0:
            # Heading toward the player: return to the ready position.
            return self._width / 2
        if phase is MatchPhase.SERVING and server is Side.OPPONENT:
            # The ball is glued to this paddle, aim from the set-up spot.
            return self._serve_anchor + self._error
        return ball.x + self._error

    def update(self, table: TableState, phase: MatchPhase, server: Side) -> float:
        """Rate-limited step toward the target, clamped inside the walls."""
        if phase not in (MatchPhase.ACTIVE, MatchPhase.SERVING):
            return table.opponent_x
        target = self.target_x(table, phase, server)
        moved = step_toward(table.opponent_x, target, self._speed)
        table.opponent_x = clamp(moved, self._half, self._width - self._half)
        return table.opponent_x

    # ------------------------------------------------------------------
    def _draw(self, width: float) -> float:
        return (self._rng.random() - 0.5) * width
