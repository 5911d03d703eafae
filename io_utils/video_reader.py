# io_utils/video_reader.py
from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional

import cv2
import numpy as np


IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff"}


class VideoReader:
    """비디오 파일 또는 이미지 폴더(이름 순)에서 BGR 프레임을 읽는다."""

    def __init__(self, path: str):
        self.path = Path(path)

        self._cap: Optional[cv2.VideoCapture] = None
        self._images: Optional[List[Path]] = None
        self._img_idx = 0

        if self.path.is_dir():
            imgs = [p for p in sorted(self.path.iterdir()) if p.suffix.lower() in IMAGE_EXTS]
            if not imgs:
                raise FileNotFoundError(f"No image frames in folder: {self.path}")
            self._images = imgs
            first = cv2.imread(str(imgs[0]), cv2.IMREAD_COLOR)
            if first is None:
                raise RuntimeError(f"Failed to read first image: {imgs[0]}")
            self._height, self._width = first.shape[:2]
        else:
            if not self.path.exists():
                raise FileNotFoundError(f"Input sequence not found: {self.path}")
            self._cap = cv2.VideoCapture(str(self.path))
            if not self._cap.isOpened():
                raise RuntimeError(f"Cannot open the '{self.path}' sequence.")
            self._width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
            self._height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

    @property
    def width(self) -> int:
        return int(self._width)

    @property
    def height(self) -> int:
        return int(self._height)

    def __iter__(self) -> Iterator[np.ndarray]:
        return self

    def __next__(self) -> np.ndarray:
        if self._images is not None:
            if self._img_idx >= len(self._images):
                raise StopIteration
            p = self._images[self._img_idx]
            self._img_idx += 1
            frame = cv2.imread(str(p), cv2.IMREAD_COLOR)
            if frame is None:
                raise RuntimeError(f"Failed to read image: {p}")
            if frame.shape[:2] != (self.height, self.width):
                raise RuntimeError(f"Frame size mismatch in {p}: {frame.shape[:2]}")
            return frame
        else:
            assert self._cap is not None
            ok, frame = self._cap.read()
            if not ok or frame is None:
                raise StopIteration
            return frame

    def read_all(self) -> List[np.ndarray]:
        """전체 시퀀스를 메모리로."""
        frames = [frame.copy() for frame in self]
        self.close()
        return frames

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
