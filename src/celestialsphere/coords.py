"""Angle-pair <-> scene-vector transforms.

Scene axes: +Y is "up" (north celestial pole in the equatorial frame, zenith
in the horizon frame). In the equatorial frame RA 0h lies on +X and RA 6h on
+Z. In the horizon frame north (azimuth 0) lies on +Z and east on +X.
"""

import math

import numpy as np

from celestialsphere.models import ObserverFrame


def clamp_unit(value: float) -> float:
    """Clamp an inverse-trig argument into [-1, 1].

    Every acos/asin in the package goes through this; float drift can push a
    dot product to 1.0000000000000002 and acos would return NaN.
    """
    return max(-1.0, min(1.0, value))


def normalize(vector) -> np.ndarray:
    """Return a unit-length copy. A zero vector stays zero."""
    v = np.asarray(vector, dtype=float)
    norm = float(np.linalg.norm(v))
    if norm == 0.0:
        return v.copy()
    return v / norm


def equatorial_to_direction(
    ra_hours: float, dec_deg: float, radius: float = 1.0
) -> np.ndarray:
    """Place (RA, Dec) on a sphere of the given radius.

    Args:
        ra_hours: Right ascension (hours; 1h = 15°).
        dec_deg: Declination (degrees).
        radius: Sphere radius in scene units.

    Returns:
        Cartesian vector of length ``radius``.
    """
    phi = math.pi / 2 - math.radians(dec_deg)  # polar angle from +Y
    theta = math.radians(ra_hours * 15.0)
    return np.array(
        [
            radius * math.sin(phi) * math.cos(theta),
            radius * math.cos(phi),
            radius * math.sin(phi) * math.sin(theta),
        ]
    )


def horizontal_to_direction(
    az_deg: float, alt_deg: float, radius: float = 1.0
) -> np.ndarray:
    """Place (azimuth, altitude) on a sphere of the given radius."""
    alt = math.radians(alt_deg)
    az = math.radians(az_deg)
    r_plane = radius * math.cos(alt)
    return np.array(
        [
            r_plane * math.sin(az),
            radius * math.sin(alt),
            r_plane * math.cos(az),
        ]
    )


def direction_to_equatorial(direction) -> tuple[float, float]:
    """Inverse of equatorial_to_direction.

    Returns:
        (ra_hours in [0, 24), dec_deg). RA is 0 at the poles.
    """
    x, y, z = normalize(direction)
    dec = math.degrees(math.asin(clamp_unit(y)))
    ra = (math.degrees(math.atan2(z, x)) % 360.0) / 15.0
    if ra >= 24.0:
        ra = 0.0
    return ra, dec


def direction_to_horizontal(direction) -> tuple[float, float]:
    """Inverse of horizontal_to_direction.

    Returns:
        (az_deg in [0, 360), alt_deg). Azimuth is 0 at zenith and nadir.
    """
    x, y, z = normalize(direction)
    alt = math.degrees(math.asin(clamp_unit(y)))
    az = math.degrees(math.atan2(x, z)) % 360.0
    if az >= 360.0:
        az = 0.0
    return az, alt


def angle_between(d1, d2) -> float:
    """Great-circle separation in radians, in [0, pi].

    A zero-length input has no direction; the separation is reported as 0.
    """
    u1 = normalize(d1)
    u2 = normalize(d2)
    if not u1.any() or not u2.any():
        return 0.0
    return math.acos(clamp_unit(float(np.dot(u1, u2))))


def observer_frame(
    latitude: float, radius: float = 1.0, up: str = "pole"
) -> ObserverFrame:
    """Zenith and north celestial pole for an observer at ``latitude``.

    Both vectors come from latitude alone, so their separation is always the
    colatitude (90 - latitude).

    Args:
        latitude: Observer latitude (degrees).
        radius: Sphere radius in scene units.
        up: ``"pole"`` for the equatorial frame (pole on +Y, zenith on the
            RA-6h meridian side) or ``"zenith"`` for the horizon frame
            (zenith on +Y, pole above the north point).

    Returns:
        ObserverFrame with both directions at ``radius``.
    """
    lat = math.radians(latitude)
    up_axis = np.array([0.0, radius, 0.0])
    tilted = np.array([0.0, radius * math.sin(lat), radius * math.cos(lat)])
    if up == "pole":
        return ObserverFrame(latitude=latitude, zenith=tilted, pole=up_axis)
    if up == "zenith":
        return ObserverFrame(latitude=latitude, zenith=up_axis, pole=tilted)
    raise ValueError(f"Unknown frame: {up}")
