# history/composite_history.py — one PatchHistory per region
from __future__ import annotations

from typing import List, Sequence

import numpy as np

from history.patch_history import PatchHistory
from labgen_errors import DimensionMismatchError, NotReadyError
from roi.regions import Region, crop


class CompositeHistory:
    """
    region 목록과 같은 순서로 PatchHistory를 보유.
    region 간 의존성 없음: insert/median은 region별로 독립.
    """
    def __init__(self, regions: Sequence[Region], capacity: int):
        self.regions: List[Region] = list(regions)
        self.capacity = int(capacity)
        self.histories: List[PatchHistory] = [PatchHistory(self.capacity) for _ in self.regions]

    def __len__(self) -> int:
        return len(self.regions)

    def empty(self) -> bool:
        """region 하나라도 비어 있으면 True."""
        return any(h.empty() for h in self.histories)

    @staticmethod
    def _check(patch: np.ndarray, region: Region, what: str) -> None:
        if patch.shape[:2] != region.shape():
            raise DimensionMismatchError(
                f"{what} patch {patch.shape[:2]} does not match region {region}"
            )

    def insert(self, mask: np.ndarray, frame: np.ndarray) -> None:
        for region, hist in zip(self.regions, self.histories):
            mask_patch = crop(mask, region)
            frame_patch = crop(frame, region)
            self._check(mask_patch, region, "mask")
            self._check(frame_patch, region, "frame")
            hist.insert(mask_patch, frame_patch)

    def median(self, size: int, out: np.ndarray) -> np.ndarray:
        """region별 median을 out의 해당 위치에 복사."""
        if self.empty():
            raise NotReadyError("Cannot generate the background before every region received a frame")

        for region, hist in zip(self.regions, self.histories):
            target = crop(out, region)
            self._check(target, region, "output")
            scratch = hist.median(size)
            self._check(scratch, region, "median")
            target[...] = scratch
        return out
