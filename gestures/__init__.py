"""
Pose predicates evaluated on a single hand frame
"""

from .base import Gesture
from .fist import FistGesture
from .index_bend import IndexBendGesture

__all__ = [
    'Gesture',
    'FistGesture',
    'IndexBendGesture',
]
