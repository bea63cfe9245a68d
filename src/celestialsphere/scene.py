"""Renderer-agnostic scene description for each mode payload.

Builds polylines and labelled markers in scene coordinates (+Y up) from the
solver results. Renderers only draw what is listed here.
"""

import math
from dataclasses import dataclass

import numpy as np

from celestialsphere.config import SphereConfig
from celestialsphere.coords import normalize, observer_frame
from celestialsphere.modes import (
    EarthPayload,
    ExplorePayload,
    ModePayload,
    PZSPayload,
    SunrisePayload,
)
from celestialsphere.pzs import star_direction
from celestialsphere.triangle import great_circle_arc

_CIRCLE_SAMPLES = 64
_FIXED_ARC_STEPS = 32
_VERTEX_LABELS = ("A", "B", "C")

_EQUATOR_COLOR = "#88aaff"
_HOUR_CIRCLE_COLOR = "#445588"
_ECLIPTIC_COLOR = "#ddaa44"
_HORIZON_COLOR = "#44aa88"
_VERTEX_COLOR = "#ff3366"
_ARC_COLOR = "#ffffff"
_LEG_COLOR = "#4ade80"
_BASE_COLOR = "#facc15"
_ZENITH_ARC_COLOR = "#60a5fa"
_AXIS_COLOR = "#64748b"
_SUN_PATH_COLOR = "#f97316"
_SUN_COLOR = "#fdba74"
_MARKER_COLOR = "#ffffff"


@dataclass(frozen=True, eq=False)
class SceneLine:
    name: str
    points: np.ndarray  # (n, 3)
    color: str
    width: float = 2.0
    dashed: bool = False
    opacity: float = 1.0


@dataclass(frozen=True, eq=False)
class SceneMarker:
    label: str
    position: np.ndarray  # (3,)
    color: str
    size: float = 6.0


@dataclass(frozen=True, eq=False)
class Scene:
    """Everything a renderer draws for one payload."""

    mode: str
    radius: float  # Celestial sphere radius
    lines: tuple[SceneLine, ...]
    markers: tuple[SceneMarker, ...]
    globe_radius: float | None = None  # Solid body inside the sphere (Earth mode)


def circle_about(
    axis, angular_radius_deg: float, radius: float, samples: int = _CIRCLE_SAMPLES
) -> np.ndarray:
    """Closed circle of points at ``angular_radius_deg`` from ``axis``.

    90° gives the great circle whose pole is ``axis``.

    Returns:
        Array of shape (samples + 1, 3); the last point repeats the first.
    """
    n = normalize(axis)
    # Any vector not parallel to the axis seeds the in-plane basis
    helper = np.array([1.0, 0.0, 0.0])
    if abs(n[0]) > 0.9:
        helper = np.array([0.0, 0.0, 1.0])
    u = normalize(np.cross(n, helper))
    v = np.cross(n, u)

    rho = math.radians(angular_radius_deg)
    center = n * radius * math.cos(rho)
    ring = radius * math.sin(rho)
    theta = np.linspace(0.0, 2.0 * math.pi, samples + 1)
    return (
        center
        + ring * np.cos(theta)[:, np.newaxis] * u
        + ring * np.sin(theta)[:, np.newaxis] * v
    )


def hour_circles(radius: float, count: int = 12) -> tuple[np.ndarray, ...]:
    """Great circles through both celestial poles, evenly spaced in RA."""
    circles = []
    for i in range(count):
        ra = math.pi * i / count  # each circle covers RA and RA + 12h
        axis = np.array([-math.sin(ra), 0.0, math.cos(ra)])
        circles.append(circle_about(axis, 90.0, radius))
    return tuple(circles)


def ecliptic_axis(obliquity_deg: float) -> np.ndarray:
    """North ecliptic pole: the celestial pole tilted about +X by the obliquity."""
    eps = math.radians(obliquity_deg)
    return np.array([0.0, math.cos(eps), math.sin(eps)])


def diurnal_path(
    latitude: float, declination: float, radius: float, samples: int = 96
) -> np.ndarray:
    """An object's daily circle in the horizon frame, from hour angle -12h to +12h."""
    hour_angles = np.linspace(-12.0, 12.0, samples + 1)
    return np.array(
        [star_direction(latitude, declination, float(h), radius) for h in hour_angles]
    )


def _arc_line(name: str, start, end, radius: float, color: str) -> SceneLine:
    points = great_circle_arc(start, end, radius, _FIXED_ARC_STEPS)
    return SceneLine(name=name, points=points, color=color, width=4.0)


def _axis_line(name: str, axis, radius: float, color: str) -> SceneLine:
    tip = normalize(axis) * radius * 1.2
    return SceneLine(
        name=name, points=np.array([-tip, tip]), color=color, width=1.0, dashed=True
    )


def _great_circle(name: str, pole, radius: float, color: str, **style) -> SceneLine:
    return SceneLine(
        name=name, points=circle_about(pole, 90.0, radius), color=color, **style
    )


def _equatorial_system(radius: float) -> list[SceneLine]:
    lines = [
        _great_circle("equator", [0, 1, 0], radius, _EQUATOR_COLOR, width=3.0),
        _axis_line("celestial axis", [0, 1, 0], radius, _EQUATOR_COLOR),
    ]
    for i, circle in enumerate(hour_circles(radius)):
        lines.append(
            SceneLine(
                name=f"hour circle {i}",
                points=circle,
                color=_HOUR_CIRCLE_COLOR,
                width=1.0,
                opacity=0.3,
            )
        )
    return lines


def _explore_scene(payload: ExplorePayload, config: SphereConfig) -> Scene:
    radius = payload.radius
    frame = observer_frame(config.default_latitude, radius, up="pole")
    lines = _equatorial_system(radius)
    lines.append(
        _great_circle(
            "ecliptic",
            ecliptic_axis(config.obliquity_deg),
            radius,
            _ECLIPTIC_COLOR,
            width=3.0,
            opacity=0.8,
        )
    )
    lines.append(
        _great_circle("horizon", frame.zenith, radius, _HORIZON_COLOR, width=3.0)
    )
    for i, arc in enumerate(payload.report.arcs):
        lines.append(
            SceneLine(name=f"arc {i}", points=arc.points, color=_ARC_COLOR, width=4.0)
        )

    markers = tuple(
        SceneMarker(label, point, _VERTEX_COLOR, 8.0)
        for label, point in zip(_VERTEX_LABELS, payload.vertices)
    )
    return Scene(
        mode=payload.mode, radius=radius, lines=tuple(lines), markers=markers
    )


def _earth_scene(payload: EarthPayload) -> Scene:
    radius = payload.radius
    globe_radius = radius * 0.99
    if payload.vertices is None:
        return Scene(
            mode=payload.mode,
            radius=radius,
            lines=(),
            markers=(),
            globe_radius=globe_radius,
        )

    vertex_a, vertex_b, apex = payload.vertices
    lines = (
        _arc_line("leg b", apex, vertex_a, globe_radius, _LEG_COLOR),
        _arc_line("leg a", apex, vertex_b, globe_radius, _LEG_COLOR),
        _arc_line("base c", vertex_a, vertex_b, globe_radius, _BASE_COLOR),
    )
    markers = tuple(
        SceneMarker(label, point, _MARKER_COLOR)
        for label, point in zip(_VERTEX_LABELS, (vertex_a, vertex_b, apex))
    )
    return Scene(
        mode=payload.mode,
        radius=radius,
        lines=lines,
        markers=markers,
        globe_radius=globe_radius,
    )


def _pzs_scene(payload: PZSPayload) -> Scene:
    radius = payload.radius
    p, z, s = payload.vertices.pole, payload.vertices.zenith, payload.vertices.star
    lines = _equatorial_system(radius)
    lines += [
        _great_circle("horizon", z, radius, _HORIZON_COLOR, width=2.0, opacity=0.6),
        _arc_line("colatitude", p, z, radius, _LEG_COLOR),
        _arc_line("codeclination", p, s, radius, _BASE_COLOR),
        _arc_line("zenith distance", z, s, radius, _ZENITH_ARC_COLOR),
    ]
    markers = (
        SceneMarker("P", p, _MARKER_COLOR),
        SceneMarker("Z", z, _LEG_COLOR),
        SceneMarker("S", s, _BASE_COLOR),
    )
    return Scene(
        mode=payload.mode, radius=radius, lines=tuple(lines), markers=markers
    )


def _sunrise_scene(payload: SunrisePayload) -> Scene:
    radius = payload.radius
    latitude, declination = payload.latitude, payload.declination
    frame = observer_frame(latitude, radius, up="zenith")
    lines = (
        _great_circle("horizon", frame.zenith, radius, _LEG_COLOR, width=2.0),
        _axis_line("polar axis", frame.pole, radius, _AXIS_COLOR),
        SceneLine(
            name="sun path",
            points=diurnal_path(latitude, declination, radius),
            color=_SUN_PATH_COLOR,
            width=3.0,
            opacity=0.4,
        ),
    )

    current = star_direction(latitude, declination, payload.current_hour_angle, radius)
    markers = [SceneMarker("Sun", current, _SUN_COLOR, 12.0)]
    rise_set = payload.rise_set
    if not rise_set.degenerate:
        for label, hour_angle in (
            ("Rise", rise_set.rise_hour_angle),
            ("Set", rise_set.set_hour_angle),
        ):
            position = star_direction(latitude, declination, hour_angle, radius)
            markers.append(SceneMarker(label, position, _SUN_PATH_COLOR))
    return Scene(
        mode=payload.mode, radius=radius, lines=lines, markers=tuple(markers)
    )


def build_scene(payload: ModePayload, config: SphereConfig | None = None) -> Scene:
    """Scene geometry for a solved mode payload.

    Args:
        payload: Result of ``modes.solve_mode``.
        config: Reference-circle constants (obliquity, explore-view
            latitude). Defaults to SphereConfig().

    Returns:
        Scene with polylines and markers at the radius the payload was
        solved at.
    """
    config = config or SphereConfig()
    if isinstance(payload, ExplorePayload):
        return _explore_scene(payload, config)
    if isinstance(payload, EarthPayload):
        return _earth_scene(payload)
    if isinstance(payload, PZSPayload):
        return _pzs_scene(payload)
    if isinstance(payload, SunrisePayload):
        return _sunrise_scene(payload)
    raise TypeError(f"Unknown mode payload: {type(payload).__name__}")
