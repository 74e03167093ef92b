"""
Camera — thin wrapper around OpenCV VideoCapture with FPS limiting.
No ML, no game state.
"""
from __future__ import annotations
import time
from typing import Optional, Tuple

import cv2
import numpy as np

from domain.errors import TrackerInitError


class Camera:
    """
    Parameters
    ----------
    device : int
        Camera index (0 = default webcam).
    fps_limit : int
        Maximum frames per second to deliver.
    """

    def __init__(self, device: int = 0, fps_limit: int = 30) -> None:
        self._cap = cv2.VideoCapture(device)
        self._frame_time = 1.0 / fps_limit
        self._prev_time: float = 0.0
        self._start = time.monotonic()
        self._last_stamp = -1

        if not self._cap.isOpened():
            self._cap.release()
            raise TrackerInitError(f"Cannot open camera device {device}")

    # ------------------------------------------------------------------
    def read(self) -> Optional[Tuple[np.ndarray, int]]:
        """
        Sleep until the next frame is due, then return (frame, timestamp_ms).
        Timestamps strictly increase. Returns None on read failure.
        """
        wait = self._frame_time - (time.monotonic() - self._prev_time)
        if wait > 0:
            time.sleep(wait)
        self._prev_time = time.monotonic()

        ret, frame = self._cap.read()
        if not ret:
            return None

        stamp = int((time.monotonic() - self._start) * 1000)
        if stamp <= self._last_stamp:
            stamp = self._last_stamp + 1
        self._last_stamp = stamp
        return frame, stamp

    def release(self) -> None:
        self._cap.release()

    def __enter__(self) -> "Camera":
        return self

    def __exit__(self, *_) -> None:
        self.release()
