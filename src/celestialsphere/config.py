"""Scene and body constants, with optional overrides from the environment."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SCENE_RADIUS = 10.0
EARTH_RADIUS_KM = 6371.0
OBLIQUITY_DEG = 23.5
DEFAULT_LATITUDE = 40.0
REFRACTION_ARCMIN = 50.0  # Refraction plus solar semi-diameter at the horizon

_MAX_REFRACTION_DEG = 5.0


class ConfigError(Exception):
    """Invalid configuration value."""


@dataclass(frozen=True)
class SphereConfig:
    """Constants passed into solver and renderer calls.

    Nothing in the package reads these as globals; whatever needs a radius or
    the refraction offset receives it from an instance of this class.
    """

    scene_radius: float = SCENE_RADIUS  # Celestial sphere radius in scene units
    body_radius_km: float = EARTH_RADIUS_KM  # Converts spherical excess to area
    obliquity_deg: float = OBLIQUITY_DEG  # Ecliptic tilt for the reference circle
    default_latitude: float = DEFAULT_LATITUDE  # Observer used by the explore view
    refraction_arcmin: float = REFRACTION_ARCMIN

    @property
    def refraction_deg(self) -> float:
        return self.refraction_arcmin / 60.0


_ENV_FIELDS: dict[str, str] = {
    "CELESTIAL_SCENE_RADIUS": "scene_radius",
    "CELESTIAL_BODY_RADIUS_KM": "body_radius_km",
    "CELESTIAL_OBLIQUITY": "obliquity_deg",
    "CELESTIAL_DEFAULT_LATITUDE": "default_latitude",
    "CELESTIAL_REFRACTION_ARCMIN": "refraction_arcmin",
}


def load_config(environ: Mapping[str, str] | None = None) -> SphereConfig:
    """Build a SphereConfig from defaults plus environment overrides.

    A ``.env`` file is loaded first when reading the process environment.

    Args:
        environ: Mapping to read overrides from. Defaults to ``os.environ``.

    Returns:
        Validated SphereConfig.

    Raises:
        ConfigError: When a value is not a number or is out of range.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    overrides: dict[str, float] = {}
    for env_key, field_name in _ENV_FIELDS.items():
        raw = environ.get(env_key)
        if raw is None or not raw.strip():
            continue
        try:
            overrides[field_name] = float(raw)
        except ValueError as e:
            raise ConfigError(f"{env_key} must be a number, got {raw!r}") from e
        logger.debug("config override %s=%s", field_name, overrides[field_name])

    config = SphereConfig(**overrides)
    _validate(config)
    return config


def _validate(config: SphereConfig) -> None:
    if config.scene_radius <= 0:
        raise ConfigError(f"scene radius must be positive: {config.scene_radius}")
    if config.body_radius_km <= 0:
        raise ConfigError(f"body radius must be positive: {config.body_radius_km}")
    if not -90.0 <= config.default_latitude <= 90.0:
        raise ConfigError(f"latitude out of range: {config.default_latitude}")
    if not 0.0 <= config.refraction_deg <= _MAX_REFRACTION_DEG:
        raise ConfigError(
            f"refraction must be within 0-{_MAX_REFRACTION_DEG * 60:.0f} arcmin: "
            f"{config.refraction_arcmin}"
        )
