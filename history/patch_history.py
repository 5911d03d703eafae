# history/patch_history.py — bounded best-of-S buffer + temporal median
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from labgen_errors import NotReadyError


@dataclass
class Candidate:
    """patch 픽셀 사본 + motion score (mask 내 non-zero 픽셀 수)."""
    patch: np.ndarray  # uint8 HxWx3, owned copy
    score: int


class PatchHistory:
    """
    region 하나의 후보 버퍼.

    - score 오름차순 유지, 길이 <= capacity
    - 같은 score면 나중에 들어온 후보가 앞
    - 버퍼가 가득 찼고 새 score가 모두보다 크면 버린다
    """
    def __init__(self, capacity: int):
        self.capacity = int(capacity)
        self.candidates: List[Candidate] = []

    def __len__(self) -> int:
        return len(self.candidates)

    def empty(self) -> bool:
        return not self.candidates

    def scores(self) -> List[int]:
        return [c.score for c in self.candidates]

    def insert(self, mask_patch: np.ndarray, frame_patch: np.ndarray) -> Optional[int]:
        """후보 삽입. 삽입 위치를 반환, 거부되면 None."""
        score = int(np.count_nonzero(mask_patch))
        cand = Candidate(patch=frame_patch.copy(), score=score)

        if not self.candidates:
            self.candidates.append(cand)
            return 0

        for pos, existing in enumerate(self.candidates):
            if score <= existing.score:
                self.candidates.insert(pos, cand)
                if len(self.candidates) > self.capacity:
                    self.candidates.pop()
                return pos

        if len(self.candidates) < self.capacity:
            self.candidates.append(cand)
            return len(self.candidates) - 1

        return None

    def median(self, size: int, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        score가 낮은 앞쪽 k = min(len, size)개 후보의 픽셀/채널별 median.
        k가 짝수면 가운데 두 값의 정수 평균.
        """
        if not self.candidates:
            raise NotReadyError("median() on an empty history")

        k = min(len(self.candidates), int(size))
        first = self.candidates[0].patch

        if out is None:
            out = np.empty_like(first)

        if k <= 1 or len(self.candidates) == 1:
            out[...] = first
            return out

        # (k, H, W, C) 임시 버퍼, 호출마다 새로 만든다
        stack = np.stack([c.patch for c in self.candidates[:k]], axis=0)
        stack.sort(axis=0)

        mid = k // 2
        if k & 1:
            out[...] = stack[mid]
        else:
            lo = stack[mid - 1].astype(np.int32)
            hi = stack[mid].astype(np.int32)
            out[...] = ((lo + hi) // 2).astype(first.dtype)
        return out
