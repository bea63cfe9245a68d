"""Isosceles triangle via Napier's rules, cross-checked with the general solver."""

import math

import numpy as np
import pytest

from celestialsphere.napier import isosceles_vertices, solve_isosceles
from celestialsphere.sexagesimal import parse
from celestialsphere.triangle import solve_triangle


@pytest.fixture
def default_solution():
    return solve_isosceles(parse("125 30 40"), parse("101 20 35"))


def test_default_earth_problem(default_solution):
    assert default_solution.c == pytest.approx(141.895115, abs=1e-5)
    assert default_solution.C == pytest.approx(149.180786, abs=1e-5)
    assert default_solution.excess == pytest.approx(220.203008, abs=1e-5)
    assert default_solution.area == pytest.approx(155996848.7, rel=1e-7)
    assert not default_solution.unstable


def test_decimal_inputs():
    solution = solve_isosceles(125.511, 101.343)
    assert solution.c == pytest.approx(141.895197, abs=1e-5)
    assert solution.C == pytest.approx(149.180807, abs=1e-5)
    assert solution.excess == pytest.approx(220.202807, abs=1e-5)
    assert solution.area == pytest.approx(155996706.5, rel=1e-7)


def test_area_scales_with_body_radius_squared(default_solution):
    unit = solve_isosceles(parse("125 30 40"), parse("101 20 35"), body_radius=1.0)
    assert unit.area == pytest.approx(math.radians(unit.excess))
    assert default_solution.area == pytest.approx(unit.area * 6371.0**2)


def test_as_dict(default_solution):
    assert set(default_solution.as_dict()) == {"c", "C", "area", "excess"}


@pytest.mark.parametrize(
    "A_deg, a_deg",
    [(60.0, 40.0), (75.0, 30.0), (125.511, 101.343), (100.0, 120.0), (50.0, 50.0)],
)
def test_matches_general_solver(A_deg, a_deg):
    napier = solve_isosceles(A_deg, a_deg)
    general = solve_triangle(isosceles_vertices(a_deg, napier.C, radius=10))
    assert general.a == pytest.approx(a_deg, abs=1e-6)
    assert general.b == pytest.approx(a_deg, abs=1e-6)
    assert general.c == pytest.approx(napier.c, abs=1e-6)
    assert general.A == pytest.approx(A_deg, abs=1e-6)
    assert general.B == pytest.approx(A_deg, abs=1e-6)
    assert general.excess == pytest.approx(napier.excess, abs=1e-6)


def test_isosceles_vertices_layout():
    vertices = isosceles_vertices(30.0, 60.0, radius=10)
    assert vertices.shape == (3, 3)
    np.testing.assert_allclose(np.linalg.norm(vertices, axis=1), 10.0)
    np.testing.assert_allclose(vertices[2], [0.0, 10.0, 0.0])
    # base vertices mirror each other across the x = 0 plane
    np.testing.assert_allclose(vertices[0] * [-1, 1, 1], vertices[1])


@pytest.mark.parametrize("A_deg, a_deg", [(90.0, 40.0), (60.0, 90.0), (90.0, 90.0)])
def test_singular_inputs_are_flagged_not_raised(A_deg, a_deg):
    solution = solve_isosceles(A_deg, a_deg)
    assert solution.unstable
    assert all(math.isfinite(v) for v in solution.as_dict().values())


def test_zero_cotangent_term_gives_straight_apex():
    # tan(0) = 0 makes 1 / (cos a tan A) infinite: C/2 goes to 90 degrees
    solution = solve_isosceles(0.0, 30.0)
    assert solution.C == pytest.approx(180.0)
    assert solution.c == pytest.approx(60.0)
    assert solution.unstable
