# segmentation/base.py
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Segmenter(ABC):
    """
    프레임 한 장 -> 전경 마스크 (uint8, 0/255).

    상태를 가진다: 순회 순서 그대로(반복 포함) 호출되어야 한다.
    첫 호출은 모델 초기화용이며 0 마스크를 반환한다.
    """
    name: str = ""

    @abstractmethod
    def process(self, frame_bgr: np.ndarray) -> np.ndarray:
        raise NotImplementedError
