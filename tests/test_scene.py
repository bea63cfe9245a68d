"""Scene geometry and the plotly / matplotlib renderers."""

import logging

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import plotly.graph_objects as go  # noqa: E402
import pytest  # noqa: E402

from celestialsphere.config import SphereConfig  # noqa: E402
from celestialsphere.coords import angle_between, equatorial_to_direction  # noqa: E402
from celestialsphere.logging_config import setup_logging  # noqa: E402
from celestialsphere.modes import (  # noqa: E402
    EarthRequest,
    ExploreRequest,
    PZSRequest,
    SunriseRequest,
    solve_mode,
)
from celestialsphere.renderers.plotly_3d import render_scene, scene_traces  # noqa: E402
from celestialsphere.renderers.static import (  # noqa: E402
    render_static_scene,
    save_static_scene,
    to_plot_axes,
)
from celestialsphere.scene import (  # noqa: E402
    build_scene,
    circle_about,
    diurnal_path,
    ecliptic_axis,
    hour_circles,
)
from celestialsphere.triangle import VertexSet  # noqa: E402


@pytest.fixture
def triangle_request():
    vertices = VertexSet(radius=10)
    for ra, dec in [(0.0, 0.0), (6.0, 0.0), (3.0, 60.0)]:
        vertices = vertices.add_or_replace(equatorial_to_direction(ra, dec, 10))
    return ExploreRequest(vertices=vertices)


# --- geometry helpers ---


@pytest.mark.parametrize("axis", [[0, 1, 0], [1, 0, 0], [0.3, -0.2, 0.9]])
@pytest.mark.parametrize("angular_radius", [30.0, 90.0])
def test_circle_about_keeps_constant_distance_from_axis(axis, angular_radius):
    points = circle_about(axis, angular_radius, radius=10, samples=36)
    assert points.shape == (37, 3)
    np.testing.assert_allclose(np.linalg.norm(points, axis=1), 10.0)
    separations = [np.degrees(angle_between(axis, p)) for p in points]
    np.testing.assert_allclose(separations, angular_radius, atol=1e-9)
    np.testing.assert_allclose(points[0], points[-1], atol=1e-9)


def test_hour_circles_pass_through_the_poles():
    circles = hour_circles(10, count=6)
    assert len(circles) == 6
    for circle in circles:
        top = max(circle[:, 1])
        assert top == pytest.approx(10.0)


def test_ecliptic_axis_is_tilted_by_obliquity():
    axis = ecliptic_axis(23.5)
    assert np.degrees(angle_between(axis, [0, 1, 0])) == pytest.approx(23.5)


def test_diurnal_path_reaches_transit_altitude():
    path = diurnal_path(40.0, 20.0, radius=10, samples=48)
    assert path.shape == (49, 3)
    highest = np.degrees(np.arcsin(path[:, 1].max() / 10))
    assert highest == pytest.approx(70.0)


# --- scenes ---


def test_explore_scene(triangle_request):
    scene = build_scene(solve_mode(triangle_request))
    names = [line.name for line in scene.lines]
    assert {"equator", "ecliptic", "horizon", "celestial axis"} <= set(names)
    assert sum(name.startswith("arc ") for name in names) == 3
    assert [m.label for m in scene.markers] == ["A", "B", "C"]
    assert scene.globe_radius is None


def test_explore_scene_with_one_vertex():
    vertices = VertexSet(radius=10).add_or_replace([1, 0, 0])
    scene = build_scene(solve_mode(ExploreRequest(vertices=vertices)))
    assert [m.label for m in scene.markers] == ["A"]
    assert not any(line.name.startswith("arc ") for line in scene.lines)


def test_earth_scene():
    scene = build_scene(solve_mode(EarthRequest()))
    assert scene.globe_radius == pytest.approx(9.9)
    assert [line.name for line in scene.lines] == ["leg b", "leg a", "base c"]
    assert [m.label for m in scene.markers] == ["A", "B", "C"]


def test_earth_scene_without_solution_draws_only_the_globe():
    scene = build_scene(solve_mode(EarthRequest(A="")))
    assert scene.lines == ()
    assert scene.markers == ()
    assert scene.globe_radius is not None


def test_pzs_scene():
    scene = build_scene(solve_mode(PZSRequest()))
    assert [m.label for m in scene.markers] == ["P", "Z", "S"]
    names = [line.name for line in scene.lines]
    for name in ("colatitude", "codeclination", "zenith distance", "horizon"):
        assert name in names


def test_sunrise_scene_marks_rise_and_set():
    scene = build_scene(solve_mode(SunriseRequest()))
    assert [m.label for m in scene.markers] == ["Sun", "Rise", "Set"]
    # rise and set sit on the refracted horizon, just below altitude 0
    for marker in scene.markers[1:]:
        assert -0.2 < marker.position[1] < 0.0


def test_sunrise_scene_without_horizon_crossing():
    scene = build_scene(solve_mode(SunriseRequest(latitude="80", day_of_year=172)))
    assert [m.label for m in scene.markers] == ["Sun"]


def test_scene_uses_configured_radius():
    config = SphereConfig(scene_radius=3.0)
    scene = build_scene(solve_mode(PZSRequest(), config), config)
    assert scene.radius == 3.0
    for marker in scene.markers:
        assert np.linalg.norm(marker.position) == pytest.approx(3.0)


@pytest.mark.parametrize("request_", [EarthRequest(), PZSRequest(), SunriseRequest()])
def test_scene_follows_the_radius_the_payload_was_solved_at(request_):
    payload = solve_mode(request_, SphereConfig(scene_radius=3.0))
    scene = build_scene(payload)
    assert scene.radius == 3.0
    for marker in scene.markers:
        assert np.linalg.norm(marker.position) == pytest.approx(3.0)


def test_explore_scene_follows_the_vertex_set_radius():
    vertices = VertexSet(radius=5).add_or_replace([0, 0, 1])
    scene = build_scene(solve_mode(ExploreRequest(vertices=vertices)))
    assert scene.radius == 5
    assert np.linalg.norm(scene.markers[0].position) == pytest.approx(5.0)


def test_build_scene_rejects_unknown_payload():
    with pytest.raises(TypeError):
        build_scene(object())


# --- renderers ---


def test_plotly_traces_follow_scene(triangle_request):
    scene = build_scene(solve_mode(triangle_request))
    traces = scene_traces(scene)
    assert isinstance(traces[0], go.Surface)
    assert len(traces) == 1 + len(scene.lines) + 1
    assert list(traces[-1].text) == ["A", "B", "C"]


def test_plotly_traces_without_markers():
    traces = scene_traces(build_scene(solve_mode(ExploreRequest())))
    assert all(t.mode == "lines" for t in traces[1:])


@pytest.mark.parametrize(
    "request_", [EarthRequest(), PZSRequest(), SunriseRequest(local_time=7.5)]
)
def test_render_scene_returns_figure(request_):
    fig = render_scene(solve_mode(request_))
    assert isinstance(fig, go.Figure)
    assert fig.layout.scene.camera.up.y == 1
    assert len(fig.data) > 1


def test_save_static_scene(tmp_path, triangle_request):
    output = save_static_scene(solve_mode(triangle_request), tmp_path / "explore.png")
    assert output.exists()
    assert output.stat().st_size > 0


def test_save_static_scene_for_earth(tmp_path):
    output = save_static_scene(solve_mode(EarthRequest()), tmp_path / "out" / "e.png")
    assert output.exists()


def test_plot_axes_keep_handedness():
    # RA 0h, RA 6h and the pole
    vertices = np.array([[10.0, 0.0, 0.0], [0.0, 0.0, 10.0], [0.0, 10.0, 0.0]])
    mapped = to_plot_axes(vertices)
    assert np.linalg.det(mapped) == pytest.approx(np.linalg.det(vertices))
    np.testing.assert_allclose(to_plot_axes(vertices[2]), [0.0, 0.0, 10.0])


def test_static_lines_are_drawn_in_plot_axes(triangle_request):
    payload = solve_mode(triangle_request)
    scene = build_scene(payload)
    fig = render_static_scene(payload)
    ax = fig.axes[0]
    assert len(ax.lines) == len(scene.lines)
    for drawn, line in zip(ax.lines, scene.lines):
        np.testing.assert_allclose(
            np.column_stack(drawn.get_data_3d()), to_plot_axes(line.points)
        )
    plt.close(fig)


# --- logging ---


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(logging.DEBUG, str(log_file))
    setup_logging(logging.DEBUG, str(log_file))
    logger = logging.getLogger("celestialsphere")
    assert len(logger.handlers) == 2
    logging.getLogger("celestialsphere.triangle").debug("written to file")
    for handler in logger.handlers:
        handler.flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")
    setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1


def test_setup_logging_closes_replaced_file_handler(tmp_path):
    setup_logging(logging.INFO, str(tmp_path / "first.log"))
    logger = logging.getLogger("celestialsphere")
    (file_handler,) = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    setup_logging(logging.INFO)
    assert file_handler not in logger.handlers
    assert file_handler.stream is None
