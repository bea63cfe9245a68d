"""Equatorial -> horizontal transform through the PZS (Pole-Zenith-Star) triangle."""

import math

import numpy as np

from celestialsphere.coords import clamp_unit, horizontal_to_direction, observer_frame
from celestialsphere.models import HorizontalPosition, PZSSides, PZSVertices


def solve_pzs(
    latitude: float, declination: float, hour_angle: float
) -> HorizontalPosition:
    """Altitude and azimuth of an object for an observer.

    Altitude comes from the cosine rule on side ZS. Azimuth uses the
    two-argument arctangent, which has no quadrant ambiguity and no division
    by cos(altitude), so it stays finite at the zenith and the poles.

    Args:
        latitude: Observer latitude (degrees).
        declination: Object declination (degrees).
        hour_angle: Local hour angle (hours, positive west).

    Returns:
        HorizontalPosition with azimuth in [0, 360), 0 = north, 90 = east.
    """
    phi = math.radians(latitude)
    delta = math.radians(declination)
    t = math.radians(hour_angle * 15.0)

    sin_alt = (
        math.sin(phi) * math.sin(delta)
        + math.cos(phi) * math.cos(delta) * math.cos(t)
    )
    altitude = math.degrees(math.asin(clamp_unit(sin_alt)))

    x = -math.sin(t) * math.cos(delta)
    y = math.sin(delta) * math.cos(phi) - math.cos(delta) * math.sin(phi) * math.cos(t)
    azimuth = math.degrees(math.atan2(x, y)) % 360.0
    if azimuth >= 360.0:
        azimuth = 0.0

    return HorizontalPosition(altitude=altitude, azimuth=azimuth)


def pzs_vertices(
    latitude: float, declination: float, hour_angle: float, radius: float = 1.0
) -> PZSVertices:
    """Scene positions of P, Z and S in the equatorial frame (pole on +Y).

    The local meridian (hour angle 0) runs through +Z; the star sits at its
    hour angle measured from there.
    """
    frame = observer_frame(latitude, radius, up="pole")
    t = math.radians(hour_angle * 15.0)
    delta = math.radians(declination)
    r_plane = radius * math.cos(delta)
    star = np.array(
        [r_plane * math.sin(t), radius * math.sin(delta), r_plane * math.cos(t)]
    )
    return PZSVertices(pole=frame.pole, zenith=frame.zenith, star=star)


def pzs_sides(latitude: float, declination: float, hour_angle: float) -> PZSSides:
    """Colatitude, codeclination and zenith distance (degrees)."""
    position = solve_pzs(latitude, declination, hour_angle)
    return PZSSides(
        colatitude=90.0 - latitude,
        codeclination=90.0 - declination,
        zenith_distance=90.0 - position.altitude,
    )


def star_direction(
    latitude: float, declination: float, hour_angle: float, radius: float = 1.0
) -> np.ndarray:
    """Scene position of an object in the horizon frame (zenith on +Y, north on +Z).

    Sampling hour angles traces the object's diurnal circle.
    """
    position = solve_pzs(latitude, declination, hour_angle)
    return horizontal_to_direction(position.azimuth, position.altitude, radius)
