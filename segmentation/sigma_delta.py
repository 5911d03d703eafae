# segmentation/sigma_delta.py — Sigma-Delta background estimator
from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np

from labgen_errors import ConfigurationError
from segmentation.base import Segmenter


class SigmaDeltaSegmenter(Segmenter):
    """
    Σ-Δ 추정 (Manzanera & Richefeu), 바이트(채널) 단위:
      1) Mt: It 방향으로 1 이동
      2) Ot = |Mt - It|
      3) Vt: N*Ot 방향으로 1 이동, [Vmin, Vmax] clamp
      4) 채널 중 하나라도 Ot >= Vt 이면 전경(255)
    """
    name = "sigma_delta"

    def __init__(self, amp_factor: int = 1, min_var: int = 15, max_var: int = 255):
        if amp_factor < 1:
            raise ConfigurationError("amp_factor must be >= 1")
        if max_var < min_var:
            raise ConfigurationError("max_var must be >= min_var")
        self.amp_factor = int(amp_factor)
        self.min_var = int(min_var)
        self.max_var = int(max_var)

        self.mt: Optional[np.ndarray] = None  # int16
        self.ot: Optional[np.ndarray] = None
        self.vt: Optional[np.ndarray] = None

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "SigmaDeltaSegmenter":
        s = cfg.get("segmentation", {}).get("sigma_delta", {}) or {}
        return cls(
            amp_factor=int(s.get("amp_factor", 1)),
            min_var=int(s.get("min_var", 15)),
            max_var=int(s.get("max_var", 255)),
        )

    def initialize(self, frame_bgr: np.ndarray) -> None:
        self.mt = frame_bgr.astype(np.int16)
        self.ot = np.zeros_like(self.mt)
        self.vt = np.full_like(self.mt, self.min_var)

    def background_model(self) -> Optional[np.ndarray]:
        return None if self.mt is None else self.mt.astype(np.uint8)

    def process(self, frame_bgr: np.ndarray) -> np.ndarray:
        if self.mt is None:
            self.initialize(frame_bgr)
            return np.zeros(frame_bgr.shape[:2], dtype=np.uint8)

        img = frame_bgr.astype(np.int16)

        self.mt += np.sign(img - self.mt).astype(np.int16)
        self.ot = np.abs(self.mt - img)

        amp = self.amp_factor * self.ot.astype(np.int32)
        vt = self.vt.astype(np.int32)
        vt += np.sign(amp - vt)
        self.vt = np.clip(vt, self.min_var, self.max_var).astype(np.int16)

        fg = self.ot >= self.vt
        if fg.ndim == 3:
            fg = fg.any(axis=2)
        return fg.astype(np.uint8) * 255
