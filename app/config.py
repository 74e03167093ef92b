from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from domain.enums import ServeGate


@dataclass
class GameConfig:
    """
    Central configuration injected into all components.
    Every tunable of the simulation lives here, never inline.
    """
    # ---- paths / tracker -----------------------------------------------
    model_path: Path = Path("models/hand_landmarker.task")
    model_url: str = (
        "https://storage.googleapis.com/mediapipe-models/"
        "hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
    )
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # ---- camera --------------------------------------------------------
    camera_device: int = 0
    fps_limit: int = 30

    # ---- field (pixels) ------------------------------------------------
    field_width: int = 1280
    field_height: int = 720
    paddle_width: float = 120.0
    paddle_height: float = 20.0
    wall_offset: float = 20.0        # paddle distance from top/bottom edge
    ball_radius: float = 10.0

    # ---- gestures (normalised camera units) ----------------------------
    fist_threshold: float = 0.08     # mean fingertip → wrist
    bend_threshold: float = 0.06     # index tip → index MCP

    # ---- player input --------------------------------------------------
    smoothing: float = 0.2
    lost_hand_frames: int = 30       # ~0.5 s at 60 Hz

    # ---- ball physics --------------------------------------------------
    serve_speed: float = 7.0
    launch_spread: float = 3.0       # |launch dx| upper bound
    speed_up: float = 1.05           # vertical gain per paddle hit
    spin: float = 10.0               # dx per unit of normalised impact
    collision_tolerance: float = 5.0 # band depth beyond the paddle face
    unstuck_margin: float = 1.0
    serve_offset: float = 5.0        # gap between paddle face and pinned ball
    max_ball_speed: Optional[float] = None

    # ---- opponent ------------------------------------------------------
    opponent_speed: float = 7.5
    serve_error_range: float = 80.0  # full width of the uniform range
    rally_error_range: float = 50.0
    opponent_serve_delay_ticks: int = 90

    # ---- rules ---------------------------------------------------------
    winning_score: int = 11
    win_margin: int = 2
    deuce_threshold: int = 10
    serves_per_turn: int = 2
    serve_gate: ServeGate = ServeGate.AFTER_COUNTDOWN

    # ---- timing --------------------------------------------------------
    tick_interval_ms: int = 16
    countdown_start: int = 3
    countdown_interval_ms: int = 1000

    @property
    def paddle_half_width(self) -> float:
        return self.paddle_width / 2


# Default singleton — import and use directly, or override in tests.
default_config = GameConfig()
