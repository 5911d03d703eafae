# segmentation/factory.py — 이름 -> segmenter
from __future__ import annotations

from typing import Any, Dict, Optional

from labgen_errors import ConfigurationError
from segmentation.base import Segmenter
from segmentation.opencv_bgs import FrameDifferenceSegmenter, KnnSegmenter, Mog2Segmenter
from segmentation.sigma_delta import SigmaDeltaSegmenter


_SEGMENTERS = {
    FrameDifferenceSegmenter.name: FrameDifferenceSegmenter,
    SigmaDeltaSegmenter.name: SigmaDeltaSegmenter,
    Mog2Segmenter.name: Mog2Segmenter,
    KnnSegmenter.name: KnnSegmenter,
}


def available_segmenters() -> list[str]:
    return sorted(_SEGMENTERS)


def build_segmenter(name: str, cfg: Optional[Dict[str, Any]] = None) -> Segmenter:
    cls = _SEGMENTERS.get(name)
    if cls is None:
        raise ConfigurationError(f"The BGS algorithm {name} is not supported.")
    try:
        return cls.from_config(cfg or {})
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid options for {name}: {e}") from e
