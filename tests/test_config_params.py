from __future__ import annotations

import pytest

from config_params import LaBGenParams, VisualizationOptions
from labgen_errors import ConfigurationError


def test_explicit_parameters():
    params = LaBGenParams.from_config({"labgen": {"a": "sigma_delta", "s": 19, "n": 0, "p": 3}}).validate()

    assert params == LaBGenParams(a="sigma_delta", s=19, n=0, p=3)
    assert params.output_name() == "output_sigma_delta_19_0_3.png"
    assert "N: pixel" in params.summary()


def test_default_preset_overrides_everything():
    params = LaBGenParams.from_config({"labgen": {"a": "knn", "s": 3, "preset": "default"}})

    assert params == LaBGenParams(a="frame_difference", s=57, n=4, p=29)


def test_universal_preset_keeps_algorithm():
    params = LaBGenParams.from_config({"labgen": {"a": "sigma_delta", "preset": ["universal"]}})

    assert params == LaBGenParams(a="sigma_delta", s=19, n=2, p=1)


def test_universal_without_algorithm_fails_validation():
    params = LaBGenParams.from_config({"labgen": {"preset": "universal"}})

    with pytest.raises(ConfigurationError, match="A parameter"):
        params.validate()


def test_conflicting_presets():
    with pytest.raises(ConfigurationError, match="same time"):
        LaBGenParams.from_config({"labgen": {"preset": ["default", "universal"]}})


def test_missing_parameter():
    with pytest.raises(ConfigurationError, match="P parameter"):
        LaBGenParams.from_config({"labgen": {"a": "knn", "s": 2, "n": 1}})


@pytest.mark.parametrize("s,n,p,msg", [
    (0, 1, 1, "S parameter"),
    (1, -1, 1, "N parameter"),
    (1, 1, 0, "P parameter must be positive"),
    (1, 1, 2, "odd"),
])
def test_validation(s, n, p, msg):
    with pytest.raises(ConfigurationError, match=msg):
        LaBGenParams(a="knn", s=s, n=n, p=p).validate()


def test_visualization_defaults():
    opts = VisualizationOptions.from_config({})

    assert opts == VisualizationOptions()
    assert opts.record_fps == 15
    assert opts.wait_ms == 1


def test_visualization_options_ignored_when_disabled(capsys):
    opts = VisualizationOptions.from_config({"visualization": {"split": True, "height": 100, "record_path": "a.mp4"}})

    assert not opts.split
    assert opts.height == 0
    assert opts.record_path == ""
    assert "[WARN]" in capsys.readouterr().out


def test_keep_ratio_needs_height_and_width():
    opts = VisualizationOptions.from_config({"visualization": {"enabled": True, "keep_ratio": True, "height": 120}})

    assert not opts.keep_ratio


def test_record_ignored_with_split_windows():
    opts = VisualizationOptions.from_config({"visualization": {"enabled": True, "split": True, "record_path": "x.mp4"}})

    assert opts.record_path == ""


def test_record_options():
    opts = VisualizationOptions.from_config(
        {"visualization": {"enabled": True, "record_path": "vis.mp4", "record_fps": 25}}
    )

    assert opts.record_path == "vis.mp4"
    assert opts.record_fps == 25


@pytest.mark.parametrize("vis", [
    {"enabled": True, "height": 0},
    {"enabled": True, "record_path": ""},
    {"enabled": True, "record_path": "v.mp4", "record_fps": 0},
    {"enabled": True, "wait_ms": -1},
])
def test_invalid_visualization_options(vis):
    with pytest.raises(ConfigurationError):
        VisualizationOptions.from_config({"visualization": vis})
