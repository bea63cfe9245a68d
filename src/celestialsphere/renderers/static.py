"""Matplotlib static PNG renderer."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from celestialsphere.config import SphereConfig
from celestialsphere.modes import ModePayload
from celestialsphere.scene import build_scene

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent.parent
_BG = "black"
_GLOBE_COLOR = "#1e3a8a"


def to_plot_axes(points) -> np.ndarray:
    """Map scene (x, y, z) with +Y up onto matplotlib (x, -z, y) with +Z up.

    A rotation about +X: handedness is preserved, so the image is not a
    mirror of the interactive view.

    Args:
        points: Array of shape (3,) or (n, 3) in scene coordinates.

    Returns:
        Array of the same shape in matplotlib axis order.
    """
    p = np.asarray(points, dtype=float)
    return np.stack([p[..., 0], -p[..., 2], p[..., 1]], axis=-1)


def render_static_scene(
    payload: ModePayload, config: SphereConfig | None = None, chart_size: int = 10
) -> Figure:
    """Render a solved mode payload as a static matplotlib 3D image.

    Scene +Y (pole or zenith) is mapped onto matplotlib's vertical axis by
    ``to_plot_axes``.

    Args:
        payload: Result of ``modes.solve_mode``.
        config: Scene constants. Defaults to SphereConfig().
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    config = config or SphereConfig()
    scene = build_scene(payload, config)

    fig = plt.figure(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor(_BG)
    ax = fig.add_subplot(projection="3d")
    ax.set_facecolor(_BG)

    if scene.globe_radius is not None:
        u, v = np.mgrid[0 : 2 * np.pi : 40j, 0 : np.pi : 20j]
        r = scene.globe_radius
        ax.plot_surface(
            r * np.cos(u) * np.sin(v),
            r * np.sin(u) * np.sin(v),
            r * np.cos(v),
            color=_GLOBE_COLOR,
            alpha=0.6,
            linewidth=0,
        )

    for line in scene.lines:
        p = to_plot_axes(line.points)
        ax.plot(
            p[:, 0],
            p[:, 1],
            p[:, 2],
            color=line.color,
            linewidth=line.width / 2,
            linestyle="--" if line.dashed else "-",
            alpha=line.opacity,
        )

    for marker in scene.markers:
        x, y, z = to_plot_axes(marker.position)
        ax.scatter([x], [y], [z], color=marker.color, s=marker.size * 6)
        ax.text(x, y, z, f" {marker.label}", color=marker.color)

    extent = scene.radius * 1.1
    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_zlim(-extent, extent)
    ax.set_box_aspect((1, 1, 1))
    ax.axis("off")

    return fig


def save_static_scene(
    payload: ModePayload,
    output_path: Path | None = None,
    config: SphereConfig | None = None,
) -> Path:
    """Save a solved mode payload as a PNG file.

    Args:
        payload: Result of ``modes.solve_mode``.
        output_path: Destination path. Auto-generated under results/ if None.
        config: Scene constants. Defaults to SphereConfig().

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        output_path = _ROOT / "results" / f"{payload.mode.lower()}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_scene(payload, config)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    logger.info("saved %s scene to %s", payload.mode, output_path)
    return output_path
