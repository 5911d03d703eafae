# pipeline/labgen.py — patch-based background generation (orchestrator)
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence, Union

import numpy as np

from history.composite_history import CompositeHistory
from history.pixel_history import PixelHistory
from labgen_errors import NotReadyError
from pipeline.traversal import TraversalSchedule, Visit
from roi.regions import partition
from segmentation.base import Segmenter
from segmentation.factory import build_segmenter


VisitCallback = Callable[[Visit, np.ndarray, np.ndarray], None]


class LaBGen:
    """
    segmenter가 움직임이 가장 적다고 판단한 patch들을 모아
    region별 temporal median으로 배경을 만든다.

    s: history 크기, n: 격자 분할 수 (0 = 픽셀 단위), p: sweep 수 (홀수)
    파라미터는 호출자가 미리 검증했다고 가정한다.
    """
    def __init__(
        self,
        height: int,
        width: int,
        segmenter: Union[str, Segmenter],
        s: int,
        n: int,
        p: int,
        cfg: Optional[Dict[str, Any]] = None,
    ):
        self.height = int(height)
        self.width = int(width)
        self.s = int(s)
        self.n = int(n)
        self.p = int(p)

        # 알 수 없는 이름이면 여기서 ConfigurationError, 상태 생성 전
        if isinstance(segmenter, Segmenter):
            self.segmenter = segmenter
            self.a = segmenter.name or type(segmenter).__name__
        else:
            self.segmenter = build_segmenter(segmenter, cfg)
            self.a = str(segmenter)

        self.history: Union[CompositeHistory, PixelHistory]
        if self.n == 0:
            # 픽셀 단위는 region별 객체 대신 배열 하나로
            self.history = PixelHistory(self.height, self.width, self.s)
        else:
            self.history = CompositeHistory(partition(self.height, self.width, self.n), self.s)
        self.segmentation_map = np.zeros((self.height, self.width), dtype=np.uint8)
        self.first_frame = True
        self.inserted = 0

    def insert(self, frame_bgr: np.ndarray) -> bool:
        """한 번의 방문. history에 들어갔으면 True (warm-up이면 False)."""
        mask = self.segmenter.process(frame_bgr.copy())
        if mask.ndim == 3:
            mask = mask.max(axis=2)
        self.segmentation_map = mask

        if self.first_frame:
            self.first_frame = False
            return False

        self.history.insert(mask, frame_bgr)
        self.inserted += 1
        return True

    def process(self, frames: Sequence[np.ndarray], on_visit: Optional[VisitCallback] = None) -> int:
        """전체 순회. 방문 수 반환."""
        visits = 0
        current_sweep = -1
        for visit in TraversalSchedule(len(frames), self.p):
            if visit.sweep != current_sweep:
                current_sweep = visit.sweep
                print(f"[PASS] Processing pass number {current_sweep + 1}...")

            frame = frames[visit.index]
            self.insert(frame)
            visits += 1

            if visit.warm_up:
                print("[SKIP] Skipping first frame...")

            if on_visit is not None:
                on_visit(visit, frame, self.segmentation_map)
        return visits

    def ready(self) -> bool:
        return not self.history.empty()

    def generate_background(self, out: Optional[np.ndarray] = None) -> np.ndarray:
        if self.history.empty():
            raise NotReadyError("Cannot generate the background with less than two inserted frames")
        if out is None:
            out = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        return self.history.median(self.s, out)
