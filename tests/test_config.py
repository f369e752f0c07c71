import logging

import numpy as np
import pytest
import yaml

from shadowcast import Direction, Opacity
from shadowcast.config import (
    FovConfig,
    FovSettings,
    cast_with_settings,
    load_fov_config,
    load_fov_settings,
)

SETTINGS_YAML = """
profiles:
  default:
    radius: 4
  torch:
    radius: 2
    include_origin: true
  flashlight:
    radius: 5
    direction: ne
    angle: 0
    light_walls: false
"""


def _write(tmp_path, text, name="fov.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return path


def _clear(x, y):
    return Opacity.CLEAR


def test_from_mapping_defaults():
    settings = FovSettings.from_mapping({"radius": 8})
    assert settings == FovSettings(radius=8)
    assert settings.light_walls is True
    assert not settings.is_beam


def test_from_mapping_beam():
    settings = FovSettings.from_mapping({"radius": 3, "direction": "sw", "angle": 45})
    assert settings.direction is Direction.SW
    assert settings.angle == 45.0
    assert settings.is_beam


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"radius": -1},
        {"radius": "8"},
        {"radius": True},
        {"radius": 3, "direction": "E"},
        {"radius": 3, "angle": 90},
        {"radius": 3, "direction": "sideways", "angle": 90},
        {"radius": 3, "direction": "E", "angle": float("nan")},
    ],
)
def test_from_mapping_rejects_bad_settings(data):
    with pytest.raises(ValueError):
        FovSettings.from_mapping(data)


def test_load_fov_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_fov_config(tmp_path / "nope.yaml")


def test_load_fov_config_empty_file(tmp_path):
    assert load_fov_config(_write(tmp_path, "")) == FovConfig()


def test_load_fov_config_invalid_yaml(tmp_path):
    path = _write(tmp_path, "profiles: [unclosed")
    with pytest.raises(yaml.YAMLError):
        load_fov_config(path)


def test_null_profiles_section_means_no_profiles(tmp_path):
    path = _write(tmp_path, "profiles:\n")
    assert load_fov_config(path).profiles == {}
    with pytest.raises(KeyError):
        load_fov_settings(path)


@pytest.mark.parametrize(
    "text",
    [
        "- radius: 3\n",
        "profiles:\n  - radius: 3\n",
        "profiles:\n  torch: 5\n",
        "profiles:\n  torch:\n    radius: 2\nlogging: verbose\n",
        "profiles:\n  torch:\n    radius: 2\nlogging:\n    level: chatty\n",
    ],
)
def test_malformed_settings_files_are_rejected(tmp_path, text):
    with pytest.raises(ValueError):
        load_fov_config(_write(tmp_path, text))


def test_logging_level_is_read_and_applied(tmp_path, monkeypatch):
    applied = []
    monkeypatch.setattr("shadowcast.config.setup_logging", applied.append)

    config = load_fov_config(_write(tmp_path, SETTINGS_YAML + "logging:\n  level: debug\n"))
    assert config.log_level == logging.DEBUG
    config.apply_logging()
    assert applied == [logging.DEBUG]

    quiet = load_fov_config(_write(tmp_path, SETTINGS_YAML, name="quiet.yaml"))
    assert quiet.log_level is None
    quiet.apply_logging()
    assert applied == [logging.DEBUG]


def test_load_fov_settings_profiles(tmp_path):
    path = _write(tmp_path, SETTINGS_YAML)
    assert load_fov_settings(path) == FovSettings(radius=4)
    assert load_fov_settings(path, "torch") == FovSettings(radius=2, include_origin=True)
    flashlight = load_fov_settings(path, "flashlight")
    assert flashlight.direction is Direction.NE
    assert flashlight.light_walls is False
    with pytest.raises(KeyError):
        load_fov_settings(path, "lantern")


def test_cast_with_settings_circle():
    calls = []
    settings = FovSettings(radius=1, include_origin=True)
    cast_with_settings(settings, (0, 0), lambda *c: calls.append(c[2:]), _clear)
    assert sorted(calls) == [(-1, 0), (0, -1), (0, 0), (0, 1), (1, 0)]


def test_cast_with_settings_beam():
    calls = []
    settings = FovSettings(radius=5, direction=Direction.NE, angle=0.0)
    cast_with_settings(settings, (0, 0), lambda *c: calls.append(c[2:]), _clear)
    assert calls == [(1, -1), (2, -2), (3, -3)]


def test_mask_opacity_uses_light_walls():
    transparent = np.array([[True, False]])
    assert FovSettings(radius=1).mask_opacity(transparent)(1, 0) == Opacity.OPAQUE_REPORTED
    dark = FovSettings(radius=1, light_walls=False)
    assert dark.mask_opacity(transparent)(1, 0) == Opacity.OPAQUE
