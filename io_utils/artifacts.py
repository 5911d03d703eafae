# io_utils/artifacts.py — 배경 이미지 + 실행 요약 저장
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import cv2
import numpy as np

from config_params import LaBGenParams


class ArtifactWriter:
    def __init__(self, out_dir: Path):
        self.out_dir = Path(out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)

    def background_path(self, params: LaBGenParams) -> Path:
        return self.out_dir / params.output_name()

    def write_background(self, background: np.ndarray, params: LaBGenParams) -> Path:
        path = self.background_path(params)
        if not cv2.imwrite(str(path), background):
            raise RuntimeError(f"Failed to write background: {path}")
        return path

    def write_summary(self, params: LaBGenParams, details: Dict[str, Any]) -> Path:
        """run_summary.json: 파라미터 + 프레임/방문 수."""
        path = self.out_dir / "run_summary.json"
        record = {"params": params.to_dict(), **details}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2, ensure_ascii=False)
        return path
