"""General spherical triangle solver: vertex set, great-circle arcs, sides, angles."""

import logging
import math
from dataclasses import dataclass

import numpy as np

from celestialsphere.coords import angle_between, clamp_unit, normalize
from celestialsphere.models import Arc, TriangleReport, TriangleSolution

logger = logging.getLogger(__name__)

CAPACITY = 3
_REPLACE_FRACTION = 0.5  # Replace only within half a radius (chord distance)
_COINCIDENT_SIN = 1e-4
_DEGENERATE_DENOMINATOR = 1e-9
_COPLANAR_VOLUME = 1e-9
_MIN_ARC_STEPS = 10
_STEPS_PER_RADIAN = 20

Point = tuple[float, float, float]


@dataclass(frozen=True)
class VertexSet:
    """Up to three triangle vertices on a sphere of ``radius``.

    Immutable: every operation returns a new set, so a state of {0, 1, 2, 3}
    vertices can be stored and compared without aliasing.
    """

    points: tuple[Point, ...] = ()
    radius: float = 1.0

    def __len__(self) -> int:
        return len(self.points)

    @property
    def vectors(self) -> np.ndarray:
        return np.array(self.points, dtype=float).reshape(-1, 3)

    @property
    def is_full(self) -> bool:
        return len(self.points) >= CAPACITY

    def add_or_replace(self, point) -> "VertexSet":
        """Add ``point`` on the sphere, or move the nearest vertex when full.

        When three vertices are present the nearest one, by chord distance, is
        replaced if it lies within half a radius of the new point; otherwise
        the set is returned unchanged.
        """
        projected = normalize(point) * self.radius
        if not projected.any():
            logger.debug("ignoring zero-length vertex")
            return self
        new_point: Point = (
            float(projected[0]),
            float(projected[1]),
            float(projected[2]),
        )

        if not self.is_full:
            return VertexSet(points=self.points + (new_point,), radius=self.radius)

        distances = np.linalg.norm(self.vectors - projected, axis=1)
        nearest = int(np.argmin(distances))
        if distances[nearest] >= _REPLACE_FRACTION * self.radius:
            logger.debug(
                "vertex set full; nearest vertex %.3f away, no replacement",
                distances[nearest],
            )
            return self

        points = list(self.points)
        points[nearest] = new_point
        return VertexSet(points=tuple(points), radius=self.radius)

    def clear(self) -> "VertexSet":
        return VertexSet(radius=self.radius)


def arc_steps(theta: float) -> int:
    """Sample count for an arc of ``theta`` radians: longer arcs get more steps."""
    return max(_MIN_ARC_STEPS, math.floor(theta * _STEPS_PER_RADIAN))


def great_circle_arc(
    v1, v2, radius: float = 1.0, steps: int | None = None
) -> np.ndarray:
    """Sample the great circle from ``v1`` to ``v2`` by spherical linear interpolation.

    Coincident (or antipodal) endpoints have no unique great circle; the
    result then repeats the first point instead of dividing by sin(0).

    Args:
        v1: Start direction (any length).
        v2: End direction (any length).
        radius: Radius the samples are scaled to.
        steps: Number of intervals. Defaults to ``arc_steps(theta)``.

    Returns:
        Array of shape (steps + 1, 3). Row 0 is v1, the last row is v2.
    """
    u1 = normalize(v1)
    u2 = normalize(v2)
    theta = angle_between(u1, u2)
    n = arc_steps(theta) if steps is None else steps
    t = np.linspace(0.0, 1.0, n + 1)

    sin_theta = math.sin(theta)
    if sin_theta < _COINCIDENT_SIN:
        return np.tile(u1 * radius, (n + 1, 1))

    c1 = np.sin((1.0 - t) * theta) / sin_theta
    c2 = np.sin(t * theta) / sin_theta
    return (c1[:, np.newaxis] * u1 + c2[:, np.newaxis] * u2) * radius


def interior_angle(
    opposite: float, adjacent1: float, adjacent2: float
) -> tuple[float, bool]:
    """Angle at a vertex from its three sides (radians), by the inverted cosine rule.

    Returns:
        (angle in radians, degenerate). When either adjacent side has a
        near-zero sine the angle is undefined and (0.0, True) is returned.
    """
    denominator = math.sin(adjacent1) * math.sin(adjacent2)
    if abs(denominator) < _DEGENERATE_DENOMINATOR:
        return 0.0, True
    value = (
        math.cos(opposite) - math.cos(adjacent1) * math.cos(adjacent2)
    ) / denominator
    return math.acos(clamp_unit(value)), False


def solve_triangle(vertices) -> TriangleSolution | None:
    """Solve the spherical triangle with vertices A, B, C.

    Args:
        vertices: Sequence of three direction vectors (any length).

    Returns:
        TriangleSolution in degrees, or None unless exactly three vertices
        are given.
    """
    if len(vertices) != CAPACITY:
        return None
    va, vb, vc = (normalize(v) for v in vertices)

    c = angle_between(va, vb)
    a = angle_between(vb, vc)
    b = angle_between(vc, va)

    angle_a, degenerate_a = interior_angle(a, b, c)
    angle_b, degenerate_b = interior_angle(b, a, c)
    angle_c, degenerate_c = interior_angle(c, a, b)

    # All three vertices on one great circle: angles collapse to 0 or 180
    volume = abs(float(np.dot(va, np.cross(vb, vc))))
    degenerate = (
        degenerate_a or degenerate_b or degenerate_c or volume < _COPLANAR_VOLUME
    )
    if degenerate:
        logger.debug("degenerate triangle: sides=%s volume=%.3g", (a, b, c), volume)

    return TriangleSolution(
        a=math.degrees(a),
        b=math.degrees(b),
        c=math.degrees(c),
        A=math.degrees(angle_a),
        B=math.degrees(angle_b),
        C=math.degrees(angle_c),
        degenerate=degenerate,
    )


def build_arcs(vertices, radius: float = 1.0) -> tuple[Arc, ...]:
    """Arcs for the current vertices: A-B for two points; A-B, B-C, C-A for three."""
    if len(vertices) == 2:
        pairs = [(0, 1)]
    elif len(vertices) == 3:
        pairs = [(0, 1), (1, 2), (2, 0)]  # sides c, a, b
    else:
        return ()

    arcs: list[Arc] = []
    for i, j in pairs:
        points = great_circle_arc(vertices[i], vertices[j], radius)
        length = math.degrees(angle_between(vertices[i], vertices[j]))
        arcs.append(Arc(points=points, length=length))
    return tuple(arcs)


def solve_vertex_set(vertex_set: VertexSet) -> TriangleReport:
    """Arcs and (with three vertices) the triangle solution for a vertex set."""
    vectors = list(vertex_set.vectors)
    return TriangleReport(
        vertex_count=len(vertex_set),
        arcs=build_arcs(vectors, vertex_set.radius),
        solution=solve_triangle(vectors),
    )
