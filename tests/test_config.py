"""Configuration defaults and environment overrides."""

import pytest

from celestialsphere.config import ConfigError, SphereConfig, load_config


def test_defaults():
    config = load_config({})
    assert config == SphereConfig()
    assert config.scene_radius == 10.0
    assert config.body_radius_km == 6371.0
    assert config.obliquity_deg == 23.5
    assert config.default_latitude == 40.0
    assert config.refraction_deg == pytest.approx(50 / 60)


def test_overrides():
    config = load_config(
        {
            "CELESTIAL_SCENE_RADIUS": "5",
            "CELESTIAL_BODY_RADIUS_KM": "3389.5",
            "CELESTIAL_OBLIQUITY": "25.19",
            "CELESTIAL_DEFAULT_LATITUDE": "-33.9",
            "CELESTIAL_REFRACTION_ARCMIN": "0",
        }
    )
    assert config.scene_radius == 5.0
    assert config.body_radius_km == 3389.5
    assert config.obliquity_deg == 25.19
    assert config.default_latitude == -33.9
    assert config.refraction_deg == 0.0


def test_blank_values_fall_back_to_defaults():
    config = load_config({"CELESTIAL_SCENE_RADIUS": "  ", "UNRELATED": "x"})
    assert config.scene_radius == 10.0


@pytest.mark.parametrize(
    "environ",
    [
        {"CELESTIAL_SCENE_RADIUS": "ten"},
        {"CELESTIAL_SCENE_RADIUS": "0"},
        {"CELESTIAL_BODY_RADIUS_KM": "-1"},
        {"CELESTIAL_DEFAULT_LATITUDE": "91"},
        {"CELESTIAL_REFRACTION_ARCMIN": "-5"},
        {"CELESTIAL_REFRACTION_ARCMIN": "600"},
    ],
)
def test_invalid_values_raise(environ):
    with pytest.raises(ConfigError):
        load_config(environ)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CELESTIAL_DEFAULT_LATITUDE", "51.5")
    assert load_config().default_latitude == 51.5
