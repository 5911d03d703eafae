# io_utils/video_writer.py — 시각화 grid 녹화
from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np


class GridRecorder:
    """
    고정 크기 BGR 프레임을 비디오로 기록.
    frame_size는 (W, H), GridWindow.frame_size()와 같은 순서.
    """
    def __init__(self, out_path: str, fps: float, frame_size: Tuple[int, int], fourcc: str = "mp4v"):
        self.out_path = out_path
        self.frame_size = (int(frame_size[0]), int(frame_size[1]))
        self.frames_written = 0
        self.writer = cv2.VideoWriter(
            out_path,
            cv2.VideoWriter_fourcc(*fourcc),
            float(fps),
            self.frame_size,
            True,
        )
        if not self.writer.isOpened():
            raise RuntimeError(f"Failed to open VideoWriter: {out_path}")

    def write(self, frame: np.ndarray) -> None:
        if frame.ndim == 2:
            frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
        h, w = frame.shape[:2]
        if (w, h) != self.frame_size:
            raise ValueError(f"Recorded frame {(w, h)} does not match {self.frame_size}")
        self.writer.write(frame)
        self.frames_written += 1

    def close(self) -> None:
        if self.writer is not None:
            self.writer.release()
            self.writer = None
