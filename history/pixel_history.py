# history/pixel_history.py — pixel-level (N=0) history, whole frame at once
from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from labgen_errors import DimensionMismatchError, NotReadyError


class PixelHistory:
    """
    픽셀마다 PatchHistory 하나와 같은 규칙을 배열 연산으로 처리.

    scores:  (S, H, W)  각 픽셀의 후보 score (0 또는 mask 채널 수)
    patches: (S, H, W, C) 후보 픽셀 값, slot 0이 score가 가장 낮은 후보
    count:   (H, W)  픽셀별 후보 수
    """
    def __init__(self, height: int, width: int, capacity: int):
        self.height = int(height)
        self.width = int(width)
        self.capacity = int(capacity)

        self.scores = np.zeros((self.capacity, self.height, self.width), dtype=np.int32)
        self.patches: Optional[np.ndarray] = None  # 첫 insert에서 frame 모양으로 할당
        self.count = np.zeros((self.height, self.width), dtype=np.int32)
        self._slots = np.arange(self.capacity, dtype=np.int32).reshape(-1, 1, 1)

    def __len__(self) -> int:
        return self.height * self.width

    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def empty(self) -> bool:
        return bool((self.count == 0).any())

    def scores_at(self, y: int, x: int) -> List[int]:
        return [int(v) for v in self.scores[: self.count[y, x], y, x]]

    def _check(self, image: np.ndarray, what: str) -> None:
        if image.shape[:2] != self.shape():
            raise DimensionMismatchError(
                f"{what} {image.shape[:2]} does not match pixel history {self.shape()}"
            )

    def _expand(self, cond: np.ndarray) -> np.ndarray:
        # (S, H, W) -> patches 차원에 맞게 broadcast
        return cond.reshape(cond.shape + (1,) * (self.patches.ndim - 3))

    def insert(self, mask: np.ndarray, frame: np.ndarray) -> int:
        """모든 픽셀에 후보 삽입. 받아들여진 픽셀 수를 반환."""
        self._check(mask, "mask")
        self._check(frame, "frame")

        score = np.count_nonzero(mask.reshape(self.height, self.width, -1), axis=2).astype(np.int32)
        if self.patches is None:
            self.patches = np.zeros((self.capacity,) + frame.shape, dtype=frame.dtype)

        # 삽입 위치 = score가 새 score보다 작은 기존 후보 수 (같으면 새 후보가 앞)
        valid = self._slots < self.count
        pos = np.count_nonzero(valid & (self.scores < score), axis=0)
        accepted = pos < self.capacity

        # slot < pos 유지, slot == pos 새 후보, slot > pos 한 칸 뒤로 (마지막은 밀려남)
        # pos == capacity(거부)이면 모든 slot이 유지된다
        before = self._slots < pos
        at = self._slots == pos

        shifted = np.roll(self.scores, 1, axis=0)
        self.scores = np.where(before, self.scores, np.where(at, score, shifted))

        shifted = np.roll(self.patches, 1, axis=0)
        self.patches = np.where(
            self._expand(before), self.patches,
            np.where(self._expand(at), frame[np.newaxis], shifted),
        )

        self.count = np.minimum(self.count + accepted, self.capacity).astype(np.int32)
        return int(np.count_nonzero(accepted))

    def median(self, size: int, out: np.ndarray) -> np.ndarray:
        """픽셀별 앞쪽 k = min(count, size)개 후보의 채널별 median."""
        if self.empty():
            raise NotReadyError("Cannot generate the background before every pixel received a frame")
        self._check(out, "output")

        k = np.minimum(self.count, int(size))
        for kv in np.unique(k):
            sel = k == kv
            if kv <= 1:
                out[sel] = self.patches[0][sel]
                continue

            stack = np.sort(self.patches[:kv, sel], axis=0)  # (k, n, C)
            mid = kv // 2
            if kv & 1:
                out[sel] = stack[mid]
            else:
                lo = stack[mid - 1].astype(np.int32)
                hi = stack[mid].astype(np.int32)
                out[sel] = ((lo + hi) // 2).astype(out.dtype)
        return out
