"""
BallPhysics — serve pinning and the per-tick ball update.

Field orientation: the opponent's paddle sits at the top, the player's at
the bottom. A ball leaving through the top is the player's point, through
the bottom the opponent's.

Explicit Euler at a fixed tick, reflection plus a spin heuristic. Wall
reflection, paddle speed-up and the spin gain together set rally length
and live side by side in GameConfig.
"""
from __future__ import annotations
import math
import random
from typing import NamedTuple, Optional

from app.config import GameConfig
from domain.enums import Side
from domain.models import BallState, TableState


class StepOutcome(NamedTuple):
    """What happened during one physics step."""
    contact: Optional[Side] = None   # paddle that hit the ball
    scorer:  Optional[Side] = None   # side credited with a point


class BallPhysics:
    """
    Parameters
    ----------
    config : GameConfig
        Field geometry and the physics constants.
    rng : random.Random
        Source for the serve's horizontal launch bias.
    """

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None) -> None:
        self._cfg = config
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Paddle geometry
    # ------------------------------------------------------------------
    @property
    def top_face(self) -> float:
        """y of the opponent paddle's playing face."""
        return self._cfg.wall_offset + self._cfg.paddle_height

    @property
    def bottom_face(self) -> float:
        """y of the player paddle's playing face."""
        return self._cfg.field_height - self._cfg.wall_offset - self._cfg.paddle_height

    def serve_y(self, server: Side) -> float:
        gap = self._cfg.ball_radius + self._cfg.serve_offset
        if server is Side.PLAYER:
            return self.bottom_face - gap
        return self.top_face + gap

    # ------------------------------------------------------------------
    # Serving
    # ------------------------------------------------------------------
    def reset_for_serve(self, server: Side) -> BallState:
        """
        Fresh ball for a new serve, centred, at rest. The player serves
        upward and the opponent downward, with a random horizontal bias.
        """
        cfg = self._cfg
        return BallState(
            x=cfg.field_width / 2,
            y=self.serve_y(server),
            base_speed=cfg.serve_speed,
            launch_dir_y=-1 if server is Side.PLAYER else 1,
            launch_dx=self._rng.uniform(-cfg.launch_spread, cfg.launch_spread),
        )

    def pin_to_server(self, table: TableState, server: Side) -> None:
        """Hold the ball on the serving paddle with zero velocity."""
        ball = table.ball
        ball.x = table.player_x if server is Side.PLAYER else table.opponent_x
        ball.y = self.serve_y(server)
        ball.dx = 0.0
        ball.dy = 0.0

    @staticmethod
    def launch(ball: BallState) -> None:
        ball.dy = ball.base_speed * ball.launch_dir_y
        ball.dx = ball.launch_dx

    # ------------------------------------------------------------------
    # Active play
    # ------------------------------------------------------------------
    def step(self, table: TableState) -> StepOutcome:
        """
        Advance one tick: integrate, reflect off side walls, resolve paddle
        hits, then check both end lines. The end-line check always runs,
        whatever happened at the paddles.

        A paddle returns the ball when the ball's leading edge ends the tick
        inside the paddle's depth band, or crossed the paddle face during
        the tick, so a fast ball cannot jump over the band.
        """
        cfg  = self._cfg
        ball = table.ball
        r    = cfg.ball_radius
        prev_y = ball.y

        ball.x += ball.dx
        ball.y += ball.dy

        # Side walls — only flip when heading outward so a ball that is
        # already past the edge cannot oscillate.
        if (ball.x - r < 0 and ball.dx < 0) or (ball.x + r > cfg.field_width and ball.dx > 0):
            ball.dx = -ball.dx

        contact: Optional[Side] = None

        # Opponent (top): leading edge is the ball's top
        if (ball.dy < 0
                and ball.y - r < self.top_face
                and (ball.y - r > cfg.wall_offset - cfg.collision_tolerance
                     or prev_y - r >= self.top_face)
                and self._overlaps(ball, table.opponent_x)):
            self._return_ball(ball, table.opponent_x)
            ball.y = self.top_face + r + cfg.unstuck_margin
            contact = Side.OPPONENT

        # Player (bottom): leading edge is the ball's bottom
        elif (ball.dy > 0
                and ball.y + r > self.bottom_face
                and (ball.y + r < cfg.field_height - cfg.wall_offset + cfg.collision_tolerance
                     or prev_y + r <= self.bottom_face)
                and self._overlaps(ball, table.player_x)):
            self._return_ball(ball, table.player_x)
            ball.y = self.bottom_face - r - cfg.unstuck_margin
            contact = Side.PLAYER

        scorer: Optional[Side] = None
        if ball.y < 0:
            scorer = Side.PLAYER
        elif ball.y > cfg.field_height:
            scorer = Side.OPPONENT

        return StepOutcome(contact=contact, scorer=scorer)

    # ------------------------------------------------------------------
    def _overlaps(self, ball: BallState, paddle_x: float) -> bool:
        return abs(ball.x - paddle_x) < self._cfg.paddle_half_width + self._cfg.ball_radius

    def _return_ball(self, ball: BallState, paddle_x: float) -> None:
        cfg = self._cfg
        dy = -ball.dy * cfg.speed_up
        if cfg.max_ball_speed is not None and abs(dy) > cfg.max_ball_speed:
            dy = math.copysign(cfg.max_ball_speed, dy)
        ball.dy = dy

        impact = (ball.x - paddle_x) / cfg.paddle_half_width
        ball.dx = impact * cfg.spin
