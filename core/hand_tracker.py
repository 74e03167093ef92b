"""
HandTracker — encapsulates all MediaPipe logic (Tasks API, Hand Landmarker).
The rest of the application never imports mediapipe directly.

The model file is downloaded on first use when it is missing.
"""
from __future__ import annotations
import urllib.request
from pathlib import Path
from typing import Any, Optional

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python as mp_python
from mediapipe.tasks.python import vision as mp_vision

from domain.errors import TrackerInitError
from domain.models import HandFrame


class HandTracker:
    """
    Runs the landmarker on BGR frames and returns at most one hand.

    `detect` de-duplicates on the frame timestamp: asking twice about the
    same frame yields None the second time, so the same pose is never
    classified (or smoothed into the paddle) twice.

    Parameters
    ----------
    model_path : Path
    model_url : str
        Where to fetch the model when model_path does not exist.
    min_detection_confidence : float
    min_tracking_confidence : float
    landmarker : object, optional
        Pre-built landmarker exposing detect_for_video(image, ts) and close().
    """

    def __init__(
        self,
        model_path: Path,
        model_url: str = "",
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        landmarker: Optional[Any] = None,
    ) -> None:
        self._model_path = Path(model_path)
        self._model_url  = model_url
        self._min_detection_confidence = min_detection_confidence
        self._min_tracking_confidence  = min_tracking_confidence
        self._landmarker = landmarker
        self._last_timestamp: Optional[int] = None

    # ------------------------------------------------------------------
    def initialize(self) -> None:
        """Load the model. Raises TrackerInitError when that is impossible."""
        if self._landmarker is not None:
            return
        try:
            self._ensure_model()
            options = mp_vision.HandLandmarkerOptions(
                base_options=mp_python.BaseOptions(model_asset_path=str(self._model_path)),
                running_mode=mp_vision.RunningMode.VIDEO,
                num_hands=1,
                min_hand_detection_confidence=self._min_detection_confidence,
                min_tracking_confidence=self._min_tracking_confidence,
            )
            self._landmarker = mp_vision.HandLandmarker.create_from_options(options)
        except (OSError, RuntimeError, ValueError) as exc:
            raise TrackerInitError(f"Cannot load hand model: {exc}") from exc

    # ------------------------------------------------------------------
    def detect(self, frame: np.ndarray, timestamp_ms: int) -> Optional[HandFrame]:
        """
        Parameters
        ----------
        frame : np.ndarray
            BGR frame from OpenCV.
        timestamp_ms : int
            Capture time of the frame; must increase between distinct frames.

        Returns
        -------
        HandFrame for the first detected hand, or None when there is no
        hand, the frame was already processed, or the model is not loaded.
        """
        if self._landmarker is None:
            return None
        if timestamp_ms == self._last_timestamp:
            return None
        self._last_timestamp = timestamp_ms

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
        result = self._landmarker.detect_for_video(image, timestamp_ms)

        if not result.hand_landmarks:
            return None
        return HandFrame.from_points(result.hand_landmarks[0])

    def release(self) -> None:
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None
        self._last_timestamp = None

    # ------------------------------------------------------------------
    def _ensure_model(self) -> None:
        if self._model_path.exists():
            return
        if not self._model_url:
            raise OSError(f"model file {self._model_path} not found")
        self._model_path.parent.mkdir(parents=True, exist_ok=True)
        urllib.request.urlretrieve(self._model_url, self._model_path)
