# run.py — LaBGen background generation from a short video sequence
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from labgen_errors import LaBGenError
from pipeline.runner import run_pipeline


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def deep_merge(a: dict, b: dict) -> dict:
    """merge b into a (recursive), return new dict"""
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="LaBGen - patch-based background generation")
    ap.add_argument("--config", default="", help="config yaml (optional)")
    ap.add_argument("-i", "--input", required=True, help="video file or frames dir")
    ap.add_argument("-o", "--output", required=True, help="output folder")
    ap.add_argument("-a", "--a-parameter", dest="a", default=None, help="background subtraction algorithm (A)")
    ap.add_argument("-s", "--s-parameter", dest="s", type=int, default=None, help="history size (S)")
    ap.add_argument("-n", "--n-parameter", dest="n", type=int, default=None, help="grid segments (N, 0 = pixel-level)")
    ap.add_argument("-p", "--p-parameter", dest="p", type=int, default=None, help="number of sweeps (P, odd)")
    ap.add_argument("-d", "--default", action="store_true", help="use the default set of parameters")
    ap.add_argument("-u", "--universal", action="store_true", help="use the universal set of parameters")
    ap.add_argument("-v", "--visualization", action="store_true", help="enable visualization")
    ap.add_argument("-l", "--split-vis", action="store_true", help="split the visualization items in separated windows")
    ap.add_argument("--height", type=int, default=None, help="height of a visualized image")
    ap.add_argument("--width", type=int, default=None, help="width of a visualized image")
    ap.add_argument("-k", "--keep-ratio", action="store_true", help="keep aspect ratio of a visualized image")
    ap.add_argument("-r", "--record", nargs="+", default=None, metavar="PATH [FPS]",
                    help="record visualization in a video file: <path> [<fps>]")
    ap.add_argument("-t", "--wait", type=int, default=None, help="wait (ms) between two frames with visualization")
    return ap


def args_to_cfg(args: argparse.Namespace) -> Dict[str, Any]:
    """CLI에서 준 값만 config 패치로 변환."""
    labgen: Dict[str, Any] = {}
    for key in ("a", "s", "n", "p"):
        value = getattr(args, key)
        if value is not None:
            labgen[key] = value

    presets: List[str] = []
    if args.default:
        presets.append("default")
    if args.universal:
        presets.append("universal")
    if presets:
        labgen["preset"] = presets

    vis: Dict[str, Any] = {}
    if args.visualization:
        vis["enabled"] = True
    if args.split_vis:
        vis["split"] = True
    if args.height is not None:
        vis["height"] = args.height
    if args.width is not None:
        vis["width"] = args.width
    if args.keep_ratio:
        vis["keep_ratio"] = True
    if args.record is not None:
        if len(args.record) > 2:
            raise LaBGenError("One or two arguments must be provided with record: <path> [<fps>]")
        vis["record_path"] = args.record[0]
        if len(args.record) == 2:
            try:
                vis["record_fps"] = int(args.record[1])
            except ValueError:
                raise LaBGenError("The number of fps for recording the video is not an integer!")
    if args.wait is not None:
        vis["wait_ms"] = args.wait

    return {"labgen": labgen, "visualization": vis, "output": {"dir": args.output}}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = load_yaml(args.config) if args.config else {}

    try:
        cfg = deep_merge(cfg, args_to_cfg(args))
        out_dir = Path(cfg["output"]["dir"])
        run_pipeline(cfg=cfg, input_path=args.input, output_dir=str(out_dir))
    except LaBGenError as e:
        print(f"[ERROR] {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
