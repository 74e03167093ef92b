"""
Geometry helpers and fixed landmark / colour constants.
"""

from .constants import *
from .geometry import (
    camera_to_field_x,
    camera_to_preview,
    clamp,
    dist,
    lerp,
    step_toward,
)

__all__ = [
    'camera_to_field_x',
    'camera_to_preview',
    'clamp',
    'dist',
    'lerp',
    'step_toward',
    'WRIST',
    'INDEX_MCP',
    'INDEX_TIP',
    'FINGERTIPS',
    'HAND_CONNECTIONS',
]
