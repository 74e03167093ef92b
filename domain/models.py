from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional, Sequence, Tuple

from domain.enums import MatchPhase, Side
from domain.errors import MalformedHandFrameError

LANDMARK_COUNT = 21


class CameraPoint(NamedTuple):
    """Landmark position in normalised, un-mirrored camera space ([0, 1])."""
    x: float
    y: float


class FieldPoint(NamedTuple):
    """Position in game-world pixels (origin top-left, y grows downward)."""
    x: float
    y: float


@dataclass(frozen=True)
class HandFrame:
    """
    One tracked hand: exactly 21 landmarks in camera space.

    Built once per detected video frame and dropped at the end of the tick.
    A wrong landmark count is a contract violation and raises immediately.
    """
    landmarks: Tuple[CameraPoint, ...]

    def __post_init__(self) -> None:
        if len(self.landmarks) != LANDMARK_COUNT:
            raise MalformedHandFrameError(
                f"expected {LANDMARK_COUNT} landmarks, got {len(self.landmarks)}"
            )

    @classmethod
    def from_points(cls, points: Sequence[Any]) -> "HandFrame":
        """
        Accepts (x, y) pairs or objects exposing .x / .y
        (MediaPipe NormalizedLandmark); z is dropped.
        """
        converted = []
        for p in points:
            if hasattr(p, "x"):
                converted.append(CameraPoint(float(p.x), float(p.y)))
            else:
                converted.append(CameraPoint(float(p[0]), float(p[1])))
        return cls(tuple(converted))

    def __getitem__(self, index: int) -> CameraPoint:
        return self.landmarks[index]


@dataclass(frozen=True)
class GestureSignals:
    """Boolean pose predicates for a single tick."""
    detected:   bool = False
    is_fist:    bool = False
    index_bent: bool = False


@dataclass
class BallState:
    """
    Ball in field pixels. While serving the velocity stays (0, 0);
    the launch_* fields hold what the serve will apply.
    """
    x: float
    y: float
    dx: float = 0.0
    dy: float = 0.0
    base_speed: float = 0.0
    launch_dir_y: int = -1
    launch_dx: float = 0.0

    @property
    def position(self) -> FieldPoint:
        return FieldPoint(self.x, self.y)


@dataclass
class Scoreboard:
    player:   int = 0
    opponent: int = 0

    def award(self, side: Side) -> None:
        if side is Side.PLAYER:
            self.player += 1
        else:
            self.opponent += 1

    def reset(self) -> None:
        self.player = 0
        self.opponent = 0

    @property
    def leader(self) -> Optional[Side]:
        if self.player > self.opponent:
            return Side.PLAYER
        if self.opponent > self.player:
            return Side.OPPONENT
        return None

    def as_tuple(self) -> Tuple[int, int]:
        return self.player, self.opponent


@dataclass
class ServeRotationState:
    """Who serves and how many consecutive points they have served."""
    server: Side = Side.PLAYER
    serves: int = 0


@dataclass
class TableState:
    """
    Everything the physics step mutates. Owned by the match and handed
    by reference to the mapper, the opponent and the physics each tick.
    """
    player_x:   float
    opponent_x: float
    ball:       BallState


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of one tick for the presentation layer."""
    phase:         MatchPhase
    player_x:      float
    opponent_x:    float
    ball:          FieldPoint
    ball_velocity: Tuple[float, float]
    player_score:  int
    opponent_score: int
    server:        Side
    countdown:     Optional[int]
    hand_detected: bool
    hand_status:   str
    winner:        Optional[Side] = None
    landmarks:     Tuple[CameraPoint, ...] = field(default_factory=tuple)
