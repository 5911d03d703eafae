# roi/regions.py — frame partitioning into independent patches
from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int

    @property
    def x1(self) -> int:
        return self.x + self.width

    @property
    def y1(self) -> int:
        return self.y + self.height

    def area(self) -> int:
        return self.width * self.height

    def shape(self) -> tuple[int, int]:
        """(rows, cols), numpy 순서."""
        return self.height, self.width


def pixel_regions(height: int, width: int) -> List[Region]:
    """픽셀 단위 모드: 1x1 region, row-major."""
    return [Region(x=j, y=i, width=1, height=1) for i in range(height) for j in range(width)]


def partition(height: int, width: int, segments: int) -> List[Region]:
    """
    frame (height, width)를 segments x segments 격자로 분할.

    나누어 떨어지지 않는 나머지 행/열은 앞쪽 region부터 하나씩 더 받는다.
    segments == 0 이면 픽셀 단위 분할.
    """
    if segments == 0:
        return pixel_regions(height, width)

    patch_h, h_rem = divmod(height, segments)
    patch_w, w_rem = divmod(width, segments)

    heights = [patch_h + (1 if i < h_rem else 0) for i in range(segments)]
    widths = [patch_w + (1 if j < w_rem else 0) for j in range(segments)]

    regions: List[Region] = []
    y = 0
    for h in heights:
        x = 0
        for w in widths:
            regions.append(Region(x=x, y=y, width=w, height=h))
            x += w
        y += h
    return regions


def crop(image: np.ndarray, region: Region) -> np.ndarray:
    """region 뷰(복사 없음). 보관이 필요하면 호출자가 copy()."""
    return image[region.y:region.y1, region.x:region.x1]
