"""Problem modes — tagged requests from the UI and the payload each one solves to.

The UI decides the mode; every solver stays mode-agnostic. ``solve_mode`` is
called on every parameter change and recomputes the whole payload.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal

import numpy as np

from celestialsphere.config import SphereConfig
from celestialsphere.models import (
    HorizontalPosition,
    IsoscelesSolution,
    PZSSides,
    PZSVertices,
    RiseSet,
    TriangleReport,
    TriangleSolution,
)
from celestialsphere.napier import isosceles_vertices, solve_isosceles
from celestialsphere.pzs import pzs_sides, pzs_vertices, solve_pzs
from celestialsphere.riseset import (
    calculate_rise_set,
    clock_to_hour_angle,
    solar_declination,
)
from celestialsphere.sexagesimal import parse
from celestialsphere.triangle import VertexSet, solve_triangle, solve_vertex_set

logger = logging.getLogger(__name__)

SolverMode = Literal["EXPLORE", "EARTH", "PZS", "SUNRISE"]
MODES: tuple[SolverMode, ...] = ("EXPLORE", "EARTH", "PZS", "SUNRISE")


# --- Requests (raw UI input; angle fields accept sexagesimal strings) ---


@dataclass(frozen=True)
class ExploreRequest:
    vertices: VertexSet = field(default_factory=VertexSet)


@dataclass(frozen=True)
class EarthRequest:
    A: str | float = "125 30 40"  # Base angle
    a: str | float = "101 20 35"  # Leg opposite A


@dataclass(frozen=True)
class PZSRequest:
    latitude: str | float = "40"
    declination: str | float = "20"
    hour_angle: str | float = "2"  # Hours


@dataclass(frozen=True)
class SunriseRequest:
    latitude: str | float = "38.7"
    day_of_year: int = 80  # ~ March equinox
    local_time: float = 12.0  # Local solar time (hours)


ModeRequest = ExploreRequest | EarthRequest | PZSRequest | SunriseRequest


# --- Payloads (one per mode, consumed by renderers and the result panel) ---


@dataclass(frozen=True, eq=False)
class ExplorePayload:
    report: TriangleReport
    vertices: np.ndarray  # (n, 3) current vertices, n <= 3
    radius: float  # Scene radius the geometry was built at
    mode: SolverMode = field(default="EXPLORE", init=False)


@dataclass(frozen=True, eq=False)
class EarthPayload:
    A: float
    a: float
    solution: IsoscelesSolution | None  # None until both A and a are non-zero
    vertices: np.ndarray | None  # Rows: A, B, apex C (scene units)
    radius: float
    mode: SolverMode = field(default="EARTH", init=False)


@dataclass(frozen=True, eq=False)
class PZSPayload:
    latitude: float
    declination: float
    hour_angle: float
    position: HorizontalPosition
    sides: PZSSides
    vertices: PZSVertices
    triangle: TriangleSolution | None  # Angle at P = hour angle
    radius: float
    mode: SolverMode = field(default="PZS", init=False)


@dataclass(frozen=True)
class SunrisePayload:
    latitude: float
    day_of_year: int
    declination: float  # Derived from day of year
    rise_set: RiseSet
    current_hour_angle: float
    current_position: HorizontalPosition
    radius: float
    mode: SolverMode = field(default="SUNRISE", init=False)


ModePayload = ExplorePayload | EarthPayload | PZSPayload | SunrisePayload


def solve_mode(
    request: ModeRequest, config: SphereConfig | None = None
) -> ModePayload:
    """Solve the problem described by a mode request.

    Args:
        request: One of the four request types.
        config: Scene and body constants. Defaults to SphereConfig().

    Returns:
        The payload matching the request's mode.

    Raises:
        TypeError: For an unknown request type.
    """
    config = config or SphereConfig()
    if isinstance(request, ExploreRequest):
        return _solve_explore(request)
    if isinstance(request, EarthRequest):
        return _solve_earth(request, config)
    if isinstance(request, PZSRequest):
        return _solve_pzs(request, config)
    if isinstance(request, SunriseRequest):
        return _solve_sunrise(request, config)
    raise TypeError(f"Unknown mode request: {type(request).__name__}")


def _solve_explore(request: ExploreRequest) -> ExplorePayload:
    return ExplorePayload(
        report=solve_vertex_set(request.vertices),
        vertices=request.vertices.vectors,
        radius=request.vertices.radius,
    )


def _solve_earth(request: EarthRequest, config: SphereConfig) -> EarthPayload:
    A = parse(request.A)
    a = parse(request.a)
    if not A or not a:
        return EarthPayload(
            A=A, a=a, solution=None, vertices=None, radius=config.scene_radius
        )

    solution = solve_isosceles(A, a, body_radius=config.body_radius_km)
    vertices = isosceles_vertices(a, solution.C, radius=config.scene_radius)
    logger.debug("earth mode: A=%s a=%s -> %s", A, a, solution)
    return EarthPayload(
        A=A, a=a, solution=solution, vertices=vertices, radius=config.scene_radius
    )


def _solve_pzs(request: PZSRequest, config: SphereConfig) -> PZSPayload:
    latitude = parse(request.latitude)
    declination = parse(request.declination)
    hour_angle = parse(request.hour_angle)

    vertices = pzs_vertices(latitude, declination, hour_angle, config.scene_radius)
    return PZSPayload(
        latitude=latitude,
        declination=declination,
        hour_angle=hour_angle,
        position=solve_pzs(latitude, declination, hour_angle),
        sides=pzs_sides(latitude, declination, hour_angle),
        vertices=vertices,
        triangle=solve_triangle([vertices.pole, vertices.zenith, vertices.star]),
        radius=config.scene_radius,
    )


def _solve_sunrise(request: SunriseRequest, config: SphereConfig) -> SunrisePayload:
    latitude = parse(request.latitude)
    declination = solar_declination(request.day_of_year)
    rise_set = calculate_rise_set(latitude, declination, config.refraction_deg)
    current = clock_to_hour_angle(request.local_time)
    return SunrisePayload(
        latitude=latitude,
        day_of_year=request.day_of_year,
        declination=declination,
        rise_set=rise_set,
        current_hour_angle=current,
        current_position=solve_pzs(latitude, declination, current),
        radius=config.scene_radius,
    )
