from __future__ import annotations

from typing import List, Sequence

import numpy as np

from segmentation.base import Segmenter


class ScriptedSegmenter(Segmenter):
    """호출 순서대로 미리 정한 개수만큼 전경 픽셀을 켠 마스크를 돌려준다."""
    name = "scripted"

    def __init__(self, counts: Sequence[int]):
        self.counts = list(counts)
        self.calls: List[np.ndarray] = []

    def process(self, frame_bgr: np.ndarray) -> np.ndarray:
        idx = len(self.calls)
        self.calls.append(frame_bgr.copy())
        mask = np.zeros(frame_bgr.shape[:2], dtype=np.uint8)
        mask.reshape(-1)[: self.counts[idx]] = 255
        return mask


def solid(h: int, w: int, bgr) -> np.ndarray:
    frame = np.zeros((h, w, 3), dtype=np.uint8)
    frame[...] = bgr
    return frame


def mask_with(h: int, w: int, count: int) -> np.ndarray:
    mask = np.zeros((h, w), dtype=np.uint8)
    mask.reshape(-1)[:count] = 255
    return mask
