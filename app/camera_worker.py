"""
CameraWorker — grabs frames in a QThread and hands them to the GUI thread
through signals. It never touches game state: the tick loop decides when
a frame is run through the tracker.
"""
from __future__ import annotations
import time
from typing import Optional

import numpy as np
from PyQt6.QtCore import QThread, pyqtSignal

from app.config import GameConfig
from core.camera import Camera
from domain.errors import TrackerInitError


class CameraWorker(QThread):
    """
    Signals:
        source_ready — first frame delivered (camera is live)
        frame_ready  — (BGR frame, timestamp_ms)
        failed       — camera could not be opened
        status_msg   — tagged log line for the UI
    """

    source_ready = pyqtSignal()
    frame_ready  = pyqtSignal(np.ndarray, int)
    failed       = pyqtSignal(str)
    status_msg   = pyqtSignal(str)

    def __init__(self, config: GameConfig, parent=None) -> None:
        super().__init__(parent)
        self._config  = config
        self._running = False
        self._camera: Optional[Camera] = None

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Capture loop — runs on the worker thread."""
        try:
            self._camera = Camera(self._config.camera_device, self._config.fps_limit)
        except TrackerInitError as exc:
            self.status_msg.emit(f"[ERROR] Camera: {exc}")
            self.failed.emit(str(exc))
            return

        self._running = True
        announced = False
        self.status_msg.emit("[CAMERA] Capture started")

        while self._running:
            grabbed = self._camera.read()
            if grabbed is None:
                self.status_msg.emit("[WARN] Empty frame — retrying")
                time.sleep(0.05)
                continue

            frame, stamp = grabbed
            if not announced:
                announced = True
                self.source_ready.emit()

            # copy for thread-safety
            self.frame_ready.emit(frame.copy(), stamp)

        self._cleanup()

    # ------------------------------------------------------------------
    def stop(self) -> None:
        self._running = False
        self.wait(3000)

    def _cleanup(self) -> None:
        if self._camera:
            self._camera.release()
            self._camera = None
        self.status_msg.emit("[CAMERA] Capture stopped")
