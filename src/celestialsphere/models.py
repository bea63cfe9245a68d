"""Data model definitions — solver results consumed by the mode layer and renderers."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Arc:
    """A discretized great-circle arc between two scene points."""

    points: np.ndarray  # (n, 3) samples from start to end, at scene radius
    length: float  # Arc length (degrees)


@dataclass(frozen=True)
class TriangleSolution:
    """Sides and interior angles of a spherical triangle, all in degrees.

    Side ``a`` is opposite vertex A (the arc B–C), and so on cyclically.
    """

    a: float
    b: float
    c: float
    A: float
    B: float
    C: float
    degenerate: bool = False  # Coincident vertex pair, or all on one great circle

    @property
    def sides(self) -> dict[str, float]:
        return {"a": self.a, "b": self.b, "c": self.c}

    @property
    def angles(self) -> dict[str, float]:
        return {"A": self.A, "B": self.B, "C": self.C}

    @property
    def excess(self) -> float:
        """Spherical excess (degrees). Strictly positive for a proper triangle."""
        return self.A + self.B + self.C - 180.0

    def as_dict(self) -> dict[str, dict[str, float]]:
        return {"sides": self.sides, "angles": self.angles}


@dataclass(frozen=True)
class TriangleReport:
    """Everything the explore view draws for the current vertex set."""

    vertex_count: int
    arcs: tuple[Arc, ...]  # 0 arcs (<2 vertices), 1 arc (2 vertices) or 3 arcs
    solution: TriangleSolution | None  # Only present with exactly 3 vertices


@dataclass(frozen=True)
class IsoscelesSolution:
    """Napier's-rules solution of the isosceles triangle A = B, a = b."""

    c: float  # Base side (degrees)
    C: float  # Apex angle (degrees)
    area: float  # Surface area in squared body-radius units (e.g. km²)
    excess: float  # Spherical excess (degrees)
    unstable: bool = False  # Input in the A≈90° / a≈90° precision-loss region

    def as_dict(self) -> dict[str, float]:
        return {"c": self.c, "C": self.C, "area": self.area, "excess": self.excess}


@dataclass(frozen=True)
class HorizontalPosition:
    """Local horizon coordinates of an object."""

    altitude: float  # Degrees above the horizon
    azimuth: float  # Degrees in [0, 360); 0 = N, 90 = E

    def as_dict(self) -> dict[str, float]:
        return {"altitude": self.altitude, "azimuth": self.azimuth}


@dataclass(frozen=True, eq=False)
class PZSVertices:
    """Scene positions of the astronomical triangle in the equatorial frame."""

    pole: np.ndarray  # North celestial pole (up axis)
    zenith: np.ndarray
    star: np.ndarray


@dataclass(frozen=True)
class PZSSides:
    """The three sides of the PZS triangle (degrees)."""

    colatitude: float  # Pole–Zenith
    codeclination: float  # Pole–Star
    zenith_distance: float  # Zenith–Star


@dataclass(frozen=True)
class RiseSet:
    """Hour angle at which an object crosses the refracted horizon.

    When ``degenerate`` is set the object never crosses it and ``hour_angle``
    is the sentinel 0.0; check the flag before using the hour angle.
    """

    hour_angle: float  # Semi-diurnal arc (hours)
    degenerate: bool = False
    circumpolar: bool = False  # With degenerate: True = never sets, False = never rises

    @property
    def rise_hour_angle(self) -> float:
        return -self.hour_angle

    @property
    def set_hour_angle(self) -> float:
        return self.hour_angle

    @property
    def day_length(self) -> float:
        """Hours spent above the refracted horizon."""
        if self.degenerate:
            return 24.0 if self.circumpolar else 0.0
        return 2.0 * self.hour_angle

    def as_dict(self) -> dict[str, float | bool]:
        return {"hourAngle": self.hour_angle, "degenerate": self.degenerate}


@dataclass(frozen=True, eq=False)
class ObserverFrame:
    """Zenith and north-celestial-pole directions, both derived from latitude."""

    latitude: float  # Degrees
    zenith: np.ndarray
    pole: np.ndarray

