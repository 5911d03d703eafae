# pipeline/runner.py — read sequence -> LaBGen -> background image
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import cv2
import numpy as np

from config_params import LaBGenParams, VisualizationOptions
from io_utils.artifacts import ArtifactWriter
from io_utils.grid_window import GridWindow
from io_utils.video_reader import VideoReader
from io_utils.video_writer import GridRecorder
from labgen_errors import LaBGenError
from pipeline.labgen import LaBGen
from pipeline.traversal import Visit


_TITLES = ("Input video", "Segmentation map", "Estimated background")


def _record_fourcc(path: str) -> str:
    return "MJPG" if path.lower().endswith(".avi") else "mp4v"


class Visualizer:
    """입력/세그멘테이션/추정 배경 표시 (+ 선택적 녹화)."""

    def __init__(self, opts: VisualizationOptions, labgen: LaBGen):
        self.opts = opts
        self.labgen = labgen
        self.background = np.zeros((labgen.height, labgen.width, 3), dtype=np.uint8)

        self.grid: Optional[GridWindow] = None
        self.recorder: Optional[GridRecorder] = None

        if not opts.split:
            cell_h = opts.height if opts.height > 0 else labgen.height
            cell_w = opts.width if opts.width > 0 else labgen.width
            self.grid = GridWindow("LaBGen", cell_h, cell_w, rows=1, cols=3, keep_ratio=opts.keep_ratio)
            if opts.record_path:
                self.recorder = GridRecorder(opts.record_path, fps=opts.record_fps,
                                            frame_size=self.grid.frame_size(),
                                            fourcc=_record_fourcc(opts.record_path))

    def __call__(self, visit: Visit, frame: np.ndarray, mask: np.ndarray) -> None:
        bg = None
        if self.labgen.ready():
            bg = self.labgen.generate_background(self.background)

        images = (frame, mask, bg)
        if self.grid is not None:
            for idx, (img, title) in enumerate(zip(images, _TITLES)):
                if img is not None:
                    self.grid.put(img, idx, title)
            self.grid.show()
            if self.recorder is not None:
                self.recorder.write(self.grid.buffer)
        else:
            for img, title in zip(images, _TITLES):
                if img is not None:
                    cv2.imshow(title, img)

        cv2.waitKey(self.opts.wait_ms)

    def finish(self, background: np.ndarray) -> None:
        """최종 배경 표시 후 키 입력 대기."""
        if self.grid is not None:
            self.grid.put(background, 2, _TITLES[2])
            self.grid.show()
        else:
            cv2.imshow(_TITLES[2], background)
        print("[VIS] Press any key to quit...")
        cv2.waitKey(0)

    def close(self) -> None:
        if self.recorder is not None:
            self.recorder.close()
            self.recorder = None
        cv2.destroyAllWindows()


def run_pipeline(
    cfg: Dict[str, Any],
    input_path: str,
    output_dir: str,
) -> Path:
    params = LaBGenParams.from_config(cfg).validate()
    vis_opts = VisualizationOptions.from_config(cfg)

    print("[INIT] parameters")
    print(params.summary())
    print(vis_opts.summary())

    # --- 로드 ---
    print(f"[READ] Reading sequence {input_path}...")
    reader = VideoReader(input_path)
    H, W = reader.height, reader.width
    print(f"[READ] height={H} width={W}")

    # segmenter 옵션 오류는 시퀀스를 읽기 전에
    try:
        labgen = LaBGen(H, W, params.a, params.s, params.n, params.p, cfg=cfg)
    except LaBGenError:
        reader.close()
        raise

    frames = reader.read_all()
    print(f"[READ] {len(frames)} frames read.")
    if not frames:
        raise RuntimeError(f"No frame could be read from {input_path}")

    # --- 처리 ---
    visualizer = Visualizer(vis_opts, labgen) if vis_opts.enabled else None

    print("[INIT] Start processing...")
    try:
        visits = labgen.process(frames, on_visit=visualizer)
        background = labgen.generate_background()
        if visualizer is not None:
            visualizer.finish(background)
    finally:
        if visualizer is not None:
            visualizer.close()

    # --- 출력 ---
    artifacts = ArtifactWriter(Path(output_dir))
    out_path = artifacts.background_path(params)
    print(f"[WRITE] Writing {out_path}...")
    artifacts.write_background(background, params)
    artifacts.write_summary(params, {
        "input": str(input_path),
        "height": H,
        "width": W,
        "frames": len(frames),
        "visits": visits,
        "inserted": labgen.inserted,
        "regions": len(labgen.history),
    })

    print(f"[OK] done. {visits} visits over {len(frames)} frames. output -> {out_path.resolve()}")
    return out_path
