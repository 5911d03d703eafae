# segmentation/opencv_bgs.py — OpenCV 기반 segmenter
from __future__ import annotations

from typing import Any, Dict, Optional

import cv2
import numpy as np

from segmentation.base import Segmenter


class FrameDifferenceSegmenter(Segmenter):
    """이전 프레임과의 절대 차이 -> gray -> threshold."""
    name = "frame_difference"

    def __init__(self, threshold: int = 15):
        self.threshold = int(threshold)
        self._prev: Optional[np.ndarray] = None

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "FrameDifferenceSegmenter":
        s = cfg.get("segmentation", {}).get("frame_difference", {}) or {}
        return cls(threshold=int(s.get("threshold", 15)))

    def process(self, frame_bgr: np.ndarray) -> np.ndarray:
        if self._prev is None:
            self._prev = frame_bgr.copy()
            return np.zeros(frame_bgr.shape[:2], dtype=np.uint8)

        diff = cv2.absdiff(self._prev, frame_bgr)
        if diff.ndim == 3:
            diff = cv2.cvtColor(diff, cv2.COLOR_BGR2GRAY)
        _, fg = cv2.threshold(diff, self.threshold, 255, cv2.THRESH_BINARY)

        self._prev = frame_bgr.copy()
        return fg


class _OpenCvSubtractor(Segmenter):
    """cv2.BackgroundSubtractor 래퍼. 그림자(127)는 배경으로 처리."""

    def __init__(self, subtractor):
        self._bgs = subtractor
        self._initialized = False

    def process(self, frame_bgr: np.ndarray) -> np.ndarray:
        fg = self._bgs.apply(frame_bgr)
        if not self._initialized:
            self._initialized = True
            return np.zeros(frame_bgr.shape[:2], dtype=np.uint8)
        _, fg = cv2.threshold(fg, 200, 255, cv2.THRESH_BINARY)
        return fg


class Mog2Segmenter(_OpenCvSubtractor):
    """Zivkovic adaptive GMM."""
    name = "mog_zivkovic"

    def __init__(self, history: int = 500, var_threshold: float = 16.0, detect_shadows: bool = True):
        super().__init__(cv2.createBackgroundSubtractorMOG2(
            history=int(history),
            varThreshold=float(var_threshold),
            detectShadows=bool(detect_shadows),
        ))

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Mog2Segmenter":
        s = cfg.get("segmentation", {}).get("mog_zivkovic", {}) or {}
        return cls(
            history=int(s.get("history", 500)),
            var_threshold=float(s.get("var_threshold", 16.0)),
            detect_shadows=bool(s.get("detect_shadows", True)),
        )


class KnnSegmenter(_OpenCvSubtractor):
    name = "knn"

    def __init__(self, history: int = 500, dist2_threshold: float = 400.0, detect_shadows: bool = True):
        super().__init__(cv2.createBackgroundSubtractorKNN(
            history=int(history),
            dist2Threshold=float(dist2_threshold),
            detectShadows=bool(detect_shadows),
        ))

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "KnnSegmenter":
        s = cfg.get("segmentation", {}).get("knn", {}) or {}
        return cls(
            history=int(s.get("history", 500)),
            dist2_threshold=float(s.get("dist2_threshold", 400.0)),
            detect_shadows=bool(s.get("detect_shadows", True)),
        )
