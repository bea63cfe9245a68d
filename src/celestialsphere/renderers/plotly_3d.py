"""Plotly 3D interactive celestial sphere renderer.

Draws the Scene built for a mode payload. Drag rotates the sphere and the
wheel zooms; the camera keeps scene +Y (pole or zenith) pointing up.
"""

import numpy as np
import plotly.graph_objects as go

from celestialsphere.config import SphereConfig
from celestialsphere.modes import ModePayload
from celestialsphere.scene import Scene, build_scene

_BG = "#050a1a"
_SPHERE_COLOR = "#88aaff"
_GLOBE_COLOR = "#1e3a8a"
_LABEL_COLOR = "#e8e8e8"


def _sphere_surface(
    radius: float, color: str, opacity: float, samples: int = 48
) -> go.Surface:
    """UV sphere mesh with +Y as the polar axis."""
    polar = np.linspace(0.0, np.pi, samples)
    azimuth = np.linspace(0.0, 2.0 * np.pi, samples)
    polar, azimuth = np.meshgrid(polar, azimuth)
    x = radius * np.sin(polar) * np.cos(azimuth)
    y = radius * np.cos(polar)
    z = radius * np.sin(polar) * np.sin(azimuth)
    return go.Surface(
        x=x,
        y=y,
        z=z,
        colorscale=[[0.0, color], [1.0, color]],
        showscale=False,
        opacity=opacity,
        hoverinfo="skip",
    )


def scene_traces(scene: Scene) -> list:
    """Plotly traces for a Scene: sphere surface, polylines, then markers."""
    traces: list = []
    if scene.globe_radius is not None:
        traces.append(_sphere_surface(scene.globe_radius, _GLOBE_COLOR, 1.0))
    else:
        traces.append(_sphere_surface(scene.radius, _SPHERE_COLOR, 0.06))

    for line in scene.lines:
        traces.append(
            go.Scatter3d(
                x=line.points[:, 0],
                y=line.points[:, 1],
                z=line.points[:, 2],
                mode="lines",
                line=dict(
                    color=line.color,
                    width=line.width,
                    dash="dash" if line.dashed else "solid",
                ),
                opacity=line.opacity,
                hoverinfo="skip",
                name=line.name,
            )
        )

    if scene.markers:
        positions = np.array([m.position for m in scene.markers])
        traces.append(
            go.Scatter3d(
                x=positions[:, 0],
                y=positions[:, 1],
                z=positions[:, 2],
                mode="markers+text",
                marker=dict(
                    size=[m.size for m in scene.markers],
                    color=[m.color for m in scene.markers],
                ),
                text=[m.label for m in scene.markers],
                textposition="top center",
                textfont=dict(color=_LABEL_COLOR),
                hoverinfo="text",
                name="markers",
            )
        )
    return traces


def render_scene(
    payload: ModePayload, config: SphereConfig | None = None
) -> go.Figure:
    """Render a solved mode payload as an interactive 3D figure.

    Args:
        payload: Result of ``modes.solve_mode``.
        config: Scene constants. Defaults to SphereConfig().

    Returns:
        Plotly Figure object.
    """
    config = config or SphereConfig()
    scene = build_scene(payload, config)
    fig = go.Figure(data=scene_traces(scene))

    extent = scene.radius * 1.25
    axis = dict(visible=False, range=[-extent, extent], autorange=False)
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=700,
        scene=dict(
            xaxis=axis,
            yaxis=axis,
            zaxis=axis,
            aspectmode="cube",
            bgcolor=_BG,
            camera=dict(up=dict(x=0, y=1, z=0), eye=dict(x=1.4, y=0.6, z=1.4)),
        ),
    )
    return fig
