from __future__ import annotations

import numpy as np
import pytest

from conftest import ScriptedSegmenter, solid
from labgen_errors import ConfigurationError, NotReadyError
from pipeline.labgen import LaBGen


def _frames():
    return [
        solid(2, 2, (0, 0, 0)),        # warm-up
        solid(2, 2, (100, 10, 7)),     # score 1
        solid(2, 2, (50, 30, 4)),      # score 0
        solid(2, 2, (255, 255, 255)),  # score 3
    ]


def test_end_to_end_single_forward_sweep():
    seg = ScriptedSegmenter([4, 1, 0, 3])
    labgen = LaBGen(2, 2, seg, s=2, n=1, p=1)

    visits = labgen.process(_frames())

    assert visits == 4
    assert labgen.inserted == 3
    assert labgen.history.histories[0].scores() == [0, 1]

    bg = labgen.generate_background()
    assert bg.shape == (2, 2, 3)
    assert (bg == np.array([75, 20, 5], dtype=np.uint8)).all()


def test_segmenter_sees_frames_in_traversal_order():
    frames = [solid(2, 2, v) for v in (0, 1, 2, 3)]
    seg = ScriptedSegmenter([0] * 10)
    labgen = LaBGen(2, 2, seg, s=3, n=0, p=3)

    labgen.process(frames)

    assert [int(f[0, 0, 0]) for f in seg.calls] == [0, 1, 2, 3, 2, 1, 0, 1, 2, 3]
    assert labgen.inserted == 9


def test_warm_up_frame_is_not_inserted():
    seg = ScriptedSegmenter([0, 0])
    labgen = LaBGen(2, 2, seg, s=2, n=1, p=1)

    assert labgen.insert(solid(2, 2, 9)) is False
    assert not labgen.ready()
    with pytest.raises(NotReadyError):
        labgen.generate_background()

    assert labgen.insert(solid(2, 2, 7)) is True
    assert (labgen.generate_background() == 7).all()


def test_single_frame_sequence_is_not_ready():
    labgen = LaBGen(2, 2, ScriptedSegmenter([0]), s=2, n=1, p=3)

    assert labgen.process([solid(2, 2, 1)]) == 1
    with pytest.raises(NotReadyError):
        labgen.generate_background()


def test_generate_background_is_idempotent():
    rng = np.random.default_rng(3)
    frames = [rng.integers(0, 256, size=(6, 8, 3), dtype=np.uint8) for _ in range(5)]
    labgen = LaBGen(6, 8, ScriptedSegmenter([0, 5, 2, 7, 1, 3, 4, 6, 2, 1, 0, 3, 2]), s=3, n=2, p=3)
    labgen.process(frames)

    first = labgen.generate_background()
    second = labgen.generate_background()

    assert np.array_equal(first, second)


def test_unknown_segmenter_name():
    with pytest.raises(ConfigurationError):
        LaBGen(4, 4, "not_a_bgs", s=2, n=1, p=1)


def test_segmenter_by_name():
    labgen = LaBGen(4, 4, "sigma_delta", s=2, n=2, p=1)

    assert labgen.a == "sigma_delta"
    assert len(labgen.history) == 4


def test_on_visit_callback():
    seen = []
    labgen = LaBGen(2, 2, ScriptedSegmenter([0, 1, 2]), s=2, n=1, p=1)

    labgen.process([solid(2, 2, v) for v in (0, 1, 2)],
                   on_visit=lambda visit, frame, mask: seen.append((visit.index, int(np.count_nonzero(mask)))))

    assert seen == [(0, 0), (1, 1), (2, 2)]
