# io_utils/grid_window.py — 입력/마스크/배경을 한 창에 격자로 표시
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np


@dataclass(frozen=True)
class TextProperties:
    """타이틀 텍스트 스타일 (BGR)."""
    font: int = cv2.FONT_HERSHEY_DUPLEX
    scale: float = 0.8
    color: Tuple[int, int, int] = (0, 0, 0)
    background: Tuple[int, int, int] = (255, 255, 255)
    thickness: int = 1
    line_type: int = cv2.LINE_AA
    margin: int = 6

    def text_height(self) -> int:
        (_, h), baseline = cv2.getTextSize("Ag", self.font, self.scale, self.thickness)
        return h + baseline + 2 * self.margin


def to_bgr(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    return image


class GridWindow:
    """
    rows x cols 셀 버퍼. 각 셀은 (height, width), titles가 있으면 셀 아래 타이틀 줄.
    """
    def __init__(
        self,
        name: str,
        height: int,
        width: int,
        rows: int,
        cols: int,
        titles: Optional[TextProperties] = TextProperties(),
        keep_ratio: bool = False,
    ):
        if height <= 0:
            raise ValueError("The height must be larger than 0")
        if width <= 0:
            raise ValueError("The width must be larger than 0")
        if rows <= 0:
            raise ValueError("The number of rows must be larger than 0")
        if cols <= 0:
            raise ValueError("The number of columns must be larger than 0")

        self.name = name
        self.height = int(height)
        self.width = int(width)
        self.rows = int(rows)
        self.cols = int(cols)
        self.titles = titles
        self.keep_ratio = bool(keep_ratio)

        self.text_h = titles.text_height() if titles is not None else 0
        self.buffer = np.zeros(((self.height + self.text_h) * self.rows, self.width * self.cols, 3), dtype=np.uint8)

        # cell rect: (x0, y0, x1, y1)
        self.cells: List[Tuple[int, int, int, int]] = []
        for row in range(self.rows):
            for col in range(self.cols):
                x0 = self.width * col
                y0 = (self.height + self.text_h) * row
                self.cells.append((x0, y0, x0 + self.width, y0 + self.height))

    def __len__(self) -> int:
        return len(self.cells)

    def frame_size(self) -> Tuple[int, int]:
        """(W, H) — VideoWriter 순서."""
        return self.buffer.shape[1], self.buffer.shape[0]

    def _target(self, image: np.ndarray, index: int) -> Tuple[int, int, int, int]:
        x0, y0, x1, y1 = self.cells[index]
        if not self.keep_ratio:
            return x0, y0, x1, y1

        ih, iw = image.shape[:2]
        ratio = min(self.height / ih, self.width / iw)
        rh, rw = max(1, int(ih * ratio)), max(1, int(iw * ratio))
        oy = y0 + (self.height - rh) // 2
        ox = x0 + (self.width - rw) // 2
        return ox, oy, ox + rw, oy + rh

    def put(self, image: np.ndarray, index: int, title: Optional[str] = None) -> None:
        if index < 0 or index >= len(self.cells):
            raise ValueError(f"The index {index} is out of bounds")

        if self.keep_ratio:
            cx0, cy0, cx1, cy1 = self.cells[index]
            self.buffer[cy0:cy1, cx0:cx1] = 0

        x0, y0, x1, y1 = self._target(image, index)
        cell = self.buffer[y0:y1, x0:x1]
        image = to_bgr(image)
        if image.shape[:2] != cell.shape[:2]:
            image = cv2.resize(image, (cell.shape[1], cell.shape[0]), interpolation=cv2.INTER_LINEAR)
        cell[...] = image

        if title is not None and self.titles is not None:
            self._put_title(title, index)

    def _put_title(self, title: str, index: int) -> None:
        t = self.titles
        cx0, cy0, cx1, cy1 = self.cells[index]
        strip = self.buffer[cy1:cy1 + self.text_h, cx0:cx1]
        strip[...] = t.background

        (tw, th), baseline = cv2.getTextSize(title, t.font, t.scale, t.thickness)
        tx = max(0, (self.width - tw) // 2)
        ty = t.margin + th
        cv2.putText(strip, title, (tx, ty), t.font, t.scale, t.color, t.thickness, t.line_type)

    def show(self) -> None:
        cv2.imshow(self.name, self.buffer)
