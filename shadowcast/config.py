# shadowcast/config.py
"""
Cast settings loaded from YAML.

A settings file holds named profiles, for example::

    profiles:
      default:
        radius: 8
      torch:
        radius: 6
        include_origin: true
      flashlight:
        radius: 12
        direction: NE
        angle: 60
        light_walls: false

    logging:
      level: DEBUG   # optional, applied by FovConfig.apply_logging
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict as PyDict, Mapping

import numpy as np
import structlog
import yaml
from numpy.typing import NDArray

from shadowcast.adapters import opacity_from_mask
from shadowcast.constants import Direction
from shadowcast.engine import OpacityFn, VisitFn
from shadowcast.fov import compute_beam, compute_circle
from shadowcast.logging_utils import resolve_level, setup_logging
from shadowcast.octants import Point

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FovSettings:
    radius: int
    include_origin: bool = False
    light_walls: bool = True
    direction: Direction | None = None
    angle: float | None = None

    @property
    def is_beam(self) -> bool:
        return self.direction is not None

    def mask_opacity(self, transparent: NDArray[np.bool_]) -> OpacityFn:
        """Opacity callable over a transparency grid using these settings."""
        return opacity_from_mask(transparent, light_walls=self.light_walls)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FovSettings":
        """Build settings from a parsed YAML mapping, validating each field."""
        if "radius" not in data:
            raise ValueError("FOV settings require a 'radius'")
        radius = data["radius"]
        if isinstance(radius, bool) or not isinstance(radius, int):
            raise ValueError(f"radius must be an integer, got {radius!r}")
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")

        raw_direction = data.get("direction")
        raw_angle = data.get("angle")
        if (raw_direction is None) != (raw_angle is None):
            raise ValueError("'direction' and 'angle' must be given together")
        direction = Direction.coerce(raw_direction) if raw_direction is not None else None
        angle = float(raw_angle) if raw_angle is not None else None
        if angle is not None and math.isnan(angle):
            raise ValueError("angle must be a number, got NaN")

        return cls(
            radius=radius,
            include_origin=bool(data.get("include_origin", False)),
            light_walls=bool(data.get("light_walls", True)),
            direction=direction,
            angle=angle,
        )


@dataclass(frozen=True)
class FovConfig:
    """Every profile of a settings file plus its optional logging level."""

    profiles: PyDict[str, FovSettings] = field(default_factory=dict)
    log_level: int | None = None

    def profile(self, name: str = "default") -> FovSettings:
        if name not in self.profiles:
            log.error("FOV profile not found", profile=name, available=sorted(self.profiles))
            raise KeyError(f"FOV profile {name!r} not found")
        return self.profiles[name]

    def apply_logging(self) -> None:
        """Configure structlog at the file's ``logging.level``, if it sets one."""
        if self.log_level is not None:
            setup_logging(self.log_level)


def _require_mapping(value: Any, what: str, config_path: Path) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        log.error(f"FOV {what} must be a mapping", path=str(config_path), got=type(value).__name__)
        raise ValueError(f"{what} in {config_path} must be a mapping, got {type(value).__name__}")
    return value


# --- Config Loading ---
def load_fov_config(config_path: Path) -> FovConfig:
    """
    Parse a settings file into validated profiles.

    A missing file raises ``FileNotFoundError``, broken YAML re-raises the
    parser error, and a malformed section or profile raises ``ValueError``.
    An empty file gives no profiles.
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        log.error("FOV settings file not found", path=str(config_path))
        raise FileNotFoundError(f"FOV settings file not found: {config_path}")
    try:
        with config_path.open("r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error("Invalid YAML in FOV settings", path=str(config_path), error=str(e), exc_info=True)
        raise

    document = _require_mapping(raw, "settings document", config_path)
    raw_profiles = _require_mapping(document.get("profiles"), "'profiles'", config_path)
    profiles = {
        str(name): FovSettings.from_mapping(
            _require_mapping(entry, f"profile {name!r}", config_path)
        )
        for name, entry in raw_profiles.items()
    }

    log_level = None
    logging_section = _require_mapping(document.get("logging"), "'logging'", config_path)
    if "level" in logging_section:
        log_level = resolve_level(logging_section["level"])

    if not profiles:
        log.warning("FOV settings file defines no profiles", path=str(config_path))
    log.info("FOV settings loaded", path=str(config_path), profiles=sorted(profiles))
    return FovConfig(profiles=profiles, log_level=log_level)


def load_fov_settings(config_path: Path, profile: str = "default") -> FovSettings:
    """Load one named profile from a settings file."""
    settings = load_fov_config(config_path).profile(profile)
    log.debug("FOV profile loaded", profile=profile, settings=settings)
    return settings


def cast_with_settings(
    settings: FovSettings,
    origin: Point,
    on_visible: VisitFn,
    is_opaque: OpacityFn,
) -> None:
    """Run the circle or beam cast described by ``settings``."""
    if settings.is_beam:
        compute_beam(
            origin,
            settings.radius,
            settings.direction,
            settings.angle,
            on_visible,
            is_opaque,
            include_origin=settings.include_origin,
        )
    else:
        compute_circle(
            origin,
            settings.radius,
            on_visible,
            is_opaque,
            include_origin=settings.include_origin,
        )


__all__ = [
    "FovSettings",
    "FovConfig",
    "load_fov_config",
    "load_fov_settings",
    "cast_with_settings",
]
