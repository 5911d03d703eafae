# config_params.py — 알고리즘/시각화 파라미터 관리
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from labgen_errors import ConfigurationError


# preset 이름 -> 덮어쓸 값
PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {"a": "frame_difference", "s": 57, "n": 4, "p": 29},
    "universal": {"s": 19, "n": 2, "p": 1},
}


@dataclass(frozen=True)
class LaBGenParams:
    """A(segmenter 이름), S(history 크기), N(격자, 0=픽셀), P(sweep 수, 홀수)."""

    a: str = ""
    s: int = 0
    n: int = 0
    p: int = 0

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "LaBGenParams":
        """config.yaml의 labgen 섹션에서 생성. preset 값이 개별 값보다 우선."""
        section = cfg.get("labgen", {})
        if section is None:
            section = {}

        presets = section.get("preset") or []
        if isinstance(presets, str):
            presets = [presets]
        for name in presets:
            if name not in PRESETS:
                raise ConfigurationError(f"Unknown preset: {name}")
        if "default" in presets and "universal" in presets:
            raise ConfigurationError(
                "You cannot use the universal and default set of parameters in the same time!"
            )

        values = {
            "a": section.get("a") or "",
            "s": section.get("s"),
            "n": section.get("n"),
            "p": section.get("p"),
        }
        for name in presets:
            values.update(PRESETS[name])

        for key in ("s", "n", "p"):
            if values[key] is None:
                raise ConfigurationError(f"You must provide the {key.upper()} parameter!")
            values[key] = int(values[key])

        return cls(a=str(values["a"]), s=values["s"], n=values["n"], p=values["p"])

    def validate(self) -> "LaBGenParams":
        if not self.a:
            raise ConfigurationError(
                "You must provide the name of the background subtraction algorithm (A parameter) to use!"
            )
        if self.s < 1:
            raise ConfigurationError("The S parameter must be positive!")
        if self.n < 0:
            raise ConfigurationError("The N parameter must be positive (0 = pixel-level)!")
        if self.p < 1:
            raise ConfigurationError("The P parameter must be positive!")
        if self.p % 2 != 1:
            raise ConfigurationError("The P parameter must be odd!")
        return self

    def output_name(self) -> str:
        return f"output_{self.a}_{self.s}_{self.n}_{self.p}.png"

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def summary(self) -> str:
        n = str(self.n) if self.n > 0 else "pixel"
        return (
            f"  A: {self.a}\n"
            f"  S: {self.s}\n"
            f"  N: {n}\n"
            f"  P: {self.p}"
        )


@dataclass(frozen=True)
class VisualizationOptions:
    """불변 시각화 옵션. 비활성 상태에서 준 옵션은 경고 후 무시."""

    enabled: bool = False
    split: bool = False
    height: int = 0
    width: int = 0
    keep_ratio: bool = False
    record_path: str = ""
    record_fps: int = 15
    wait_ms: int = 1

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "VisualizationOptions":
        v = cfg.get("visualization", {})
        if v is None:
            v = {}

        enabled = bool(v.get("enabled", False))

        split = bool(v.get("split", False))
        if split and not enabled:
            print("[WARN] split option without visualization will be ignored")
            split = False

        height = cls._dimension(v, "height", enabled, split)
        width = cls._dimension(v, "width", enabled, split)

        keep_ratio = bool(v.get("keep_ratio", False))
        if keep_ratio:
            if not enabled:
                print("[WARN] keep_ratio option without visualization will be ignored")
                keep_ratio = False
            elif split:
                print("[WARN] keep_ratio option with split windows will be ignored")
                keep_ratio = False
            elif height < 1 or width < 1:
                print("[WARN] keep_ratio option with no height or width defined will be ignored")
                keep_ratio = False

        record_path = ""
        record_fps = 15
        if v.get("record_path") is not None:
            if not enabled:
                print("[WARN] record option without visualization will be ignored")
            elif split:
                print("[WARN] record option with split windows will be ignored")
            else:
                record_path = str(v.get("record_path"))
                if not record_path:
                    raise ConfigurationError("The record path cannot be empty!")
                record_fps = int(v.get("record_fps", 15))
                if record_fps < 1:
                    raise ConfigurationError("The number of fps for recording the video must be positive!")

        wait_ms = int(v.get("wait_ms", 1))
        if wait_ms != 1 and not enabled:
            print("[WARN] wait option without visualization will be ignored")
        if wait_ms < 0 and enabled:
            raise ConfigurationError("The wait parameter must be positive!")

        return cls(
            enabled=enabled,
            split=split,
            height=height,
            width=width,
            keep_ratio=keep_ratio,
            record_path=record_path,
            record_fps=record_fps,
            wait_ms=wait_ms,
        )

    @staticmethod
    def _dimension(v: Dict[str, Any], key: str, enabled: bool, split: bool) -> int:
        value: Optional[Any] = v.get(key)
        if value is None:
            return 0
        if not enabled:
            print(f"[WARN] {key} option without visualization will be ignored")
            return 0
        if split:
            print(f"[WARN] {key} option with split windows will be ignored")
            return 0
        value = int(value)
        if value < 1:
            raise ConfigurationError(f"The {key} parameter must be positive!")
        return value

    def summary(self) -> str:
        lines = []
        for f in fields(self):
            lines.append(f"  {f.name}: {getattr(self, f.name)}")
        return "Visualization:\n" + "\n".join(lines)
