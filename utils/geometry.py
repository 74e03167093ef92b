"""
Pure geometric helpers and the explicit conversions between the three
coordinate spaces the game touches:

  * camera space  — normalised, un-mirrored landmarks (CameraPoint)
  * field space   — game-world pixels (FieldPoint)
  * preview space — pixels of the mirrored camera preview
"""
from __future__ import annotations
import math
from typing import Tuple

from domain.models import CameraPoint


def dist(a: CameraPoint, b: CameraPoint) -> float:
    """Euclidean distance between two 2D points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def lerp(current: float, target: float, factor: float) -> float:
    """Exponential smoothing step: move `factor` of the way to target."""
    return current + (target - current) * factor


def step_toward(current: float, target: float, max_step: float) -> float:
    """Move toward target by at most max_step, snapping when within reach."""
    diff = target - current
    if abs(diff) > max_step:
        return current + (max_step if diff > 0 else -max_step)
    return target


def camera_to_field_x(point: CameraPoint, field_width: float) -> float:
    """
    Camera x → field x. The preview is shown mirrored while landmarks
    arrive raw, so the axis is flipped before scaling.
    """
    return (1.0 - point.x) * field_width


def camera_to_preview(point: CameraPoint, width: int, height: int) -> Tuple[int, int]:
    """Camera point → pixel on a horizontally mirrored preview image."""
    return int((1.0 - point.x) * width), int(point.y * height)
