"""Isosceles spherical triangle solved with Napier's rules for right triangles.

The triangle has base angles A = B and legs a = b. Bisecting the apex angle C
splits it into two right triangles with hypotenuse a, angle A, and legs c/2
and the altitude. Napier's rules then give::

    cos A = tan(c/2) cot a   ->  tan(c/2) = cos A tan a
    cos a = cot A cot(C/2)   ->  tan(C/2) = 1 / (cos a tan A)

Both use single-argument atan, so the results follow its branch: inputs near
A = 90° or a = 90° drive the arguments towards 0 or infinity and the outputs
lose precision or flip sign. That region is flagged, not corrected.
"""

import logging
import math

import numpy as np

from celestialsphere.config import EARTH_RADIUS_KM
from celestialsphere.models import IsoscelesSolution

logger = logging.getLogger(__name__)

_UNSTABLE_THRESHOLD = 1e-6


def solve_isosceles(
    A_deg: float, a_deg: float, body_radius: float = EARTH_RADIUS_KM
) -> IsoscelesSolution:
    """Solve for base side c, apex angle C, spherical excess and area.

    Args:
        A_deg: Base angle A (= B), degrees.
        a_deg: Leg a (= b), degrees.
        body_radius: Radius of the body the triangle lies on; area is
            returned in this unit squared.

    Returns:
        IsoscelesSolution with ``unstable`` set inside the singular region.
    """
    A = math.radians(A_deg)
    a = math.radians(a_deg)

    half_c = math.atan(math.cos(A) * math.tan(a))

    cot_term = math.cos(a) * math.tan(A)
    if cot_term == 0.0:
        # 1/±0 is ±infinity; atan of it is ±90°
        half_C = math.copysign(math.pi / 2, cot_term)
    else:
        half_C = math.atan(1.0 / cot_term)

    c_deg = math.degrees(2.0 * half_c)
    C_deg = math.degrees(2.0 * half_C)
    excess = 2.0 * A_deg + C_deg - 180.0
    area = math.radians(excess) * body_radius**2

    smallest = min(abs(cot_term), abs(math.cos(A)), abs(math.cos(a)))
    unstable = smallest < _UNSTABLE_THRESHOLD
    if unstable:
        logger.debug("isosceles solve near singular region: A=%s a=%s", A_deg, a_deg)

    return IsoscelesSolution(
        c=c_deg, C=C_deg, area=area, excess=excess, unstable=unstable
    )


def isosceles_vertices(a_deg: float, C_deg: float, radius: float = 1.0) -> np.ndarray:
    """Scene positions for an isosceles triangle with its apex at the pole.

    The base vertices sit at latitude 90 - a, at longitudes -C/2 and +C/2, so
    both legs from the apex have length a and the apex angle is C.

    Returns:
        Array of shape (3, 3): rows are vertices A, B and apex C.
    """
    lat = math.radians(90.0 - a_deg)
    y = radius * math.sin(lat)
    r_plane = radius * math.cos(lat)
    half = math.radians(C_deg / 2.0)
    vertex_a = [r_plane * math.sin(-half), y, r_plane * math.cos(-half)]
    vertex_b = [r_plane * math.sin(half), y, r_plane * math.cos(half)]
    apex = [0.0, radius, 0.0]
    return np.array([vertex_a, vertex_b, apex])
