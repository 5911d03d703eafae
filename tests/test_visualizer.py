from __future__ import annotations

import cv2
import numpy as np
import pytest

from config_params import VisualizationOptions
from conftest import ScriptedSegmenter, solid
from pipeline.labgen import LaBGen
from pipeline.runner import Visualizer


@pytest.fixture
def highgui(monkeypatch):
    """창을 띄우지 않고 imshow/waitKey 호출만 기록."""
    calls = {"shown": [], "waits": [], "destroyed": 0}

    def imshow(name, image):
        calls["shown"].append((name, image.copy()))

    def wait_key(delay=0):
        calls["waits"].append(delay)
        return -1

    def destroy_all():
        calls["destroyed"] += 1

    monkeypatch.setattr(cv2, "imshow", imshow)
    monkeypatch.setattr(cv2, "waitKey", wait_key)
    monkeypatch.setattr(cv2, "destroyAllWindows", destroy_all)
    return calls


def _frames():
    return [solid(16, 16, (30, 60, 90)) for _ in range(4)]


def test_grid_visits_are_shown_and_recorded(tmp_path, highgui, capsys):
    record = tmp_path / "vis.avi"
    opts = VisualizationOptions(enabled=True, record_path=str(record), wait_ms=5)
    labgen = LaBGen(16, 16, ScriptedSegmenter([0] * 4), s=2, n=1, p=1)
    vis = Visualizer(opts, labgen)

    visits = labgen.process(_frames(), on_visit=vis)

    assert visits == 4
    assert vis.recorder.frames_written == 4
    assert [name for name, _ in highgui["shown"]] == ["LaBGen"] * 4
    assert highgui["waits"] == [5] * 4

    # 첫 방문은 warm-up이라 배경 셀이 비어 있다
    x0, y0, x1, y1 = vis.grid.cells[2]
    first = highgui["shown"][0][1]
    assert not first[y0:y1, x0:x1].any()

    background = labgen.generate_background()
    vis.finish(background)

    assert np.array_equal(vis.grid.buffer[y0:y1, x0:x1], background)
    assert highgui["waits"][-1] == 0
    assert "[VIS] Press any key to quit..." in capsys.readouterr().out

    vis.close()
    assert vis.recorder is None
    assert highgui["destroyed"] == 1
    assert record.stat().st_size > 0


def test_split_windows_show_each_image(highgui):
    opts = VisualizationOptions(enabled=True, split=True)
    labgen = LaBGen(16, 16, ScriptedSegmenter([0] * 4), s=2, n=1, p=1)
    vis = Visualizer(opts, labgen)

    assert vis.grid is None
    assert vis.recorder is None

    labgen.process(_frames()[:2], on_visit=vis)

    names = [name for name, _ in highgui["shown"]]
    # warm-up: 배경 없음, 두 번째 방문부터 세 창
    assert names == ["Input video", "Segmentation map",
                     "Input video", "Segmentation map", "Estimated background"]

    vis.finish(labgen.generate_background())
    assert highgui["shown"][-1][0] == "Estimated background"
    vis.close()
