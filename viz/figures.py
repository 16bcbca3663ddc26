from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from tilemap.grid import Grid


def tile_map_figure(grid: Grid, *, height: int = 640) -> go.Figure:
    """Tiles as an RGB image placed in world coordinates (+y up)."""

    geo = grid.geometry
    tw, th = geo.tile_size
    rgb = np.clip(grid.rgb_image(), 0.0, 1.0) * 255.0
    # rgb_image has row 0 at the top; plotly Image wants row 0 at y0.
    img = np.ascontiguousarray(rgb[::-1]).astype(np.uint8)

    x0 = float(np.min(grid.x))
    y0 = float(np.min(grid.y))

    fig = go.Figure(
        go.Image(
            z=img,
            x0=x0 + tw / 2.0,
            y0=y0 + th / 2.0,
            dx=tw,
            dy=th,
            hovertemplate="x=%{x:.0f}<br>y=%{y:.0f}<extra></extra>",
        )
    )
    fig.update_layout(
        height=int(height),
        margin=dict(l=0, r=0, t=0, b=0),
        paper_bgcolor="black",
        plot_bgcolor="black",
    )
    fig.update_xaxes(showgrid=False, zeroline=False, constrain="domain")
    fig.update_yaxes(
        showgrid=False,
        zeroline=False,
        autorange=True,
        scaleanchor="x",
        scaleratio=1,
    )
    return fig


def elevation_histogram(grid: Grid, *, sea_level: float | None = None) -> go.Figure:
    fig = go.Figure(
        go.Histogram(
            x=np.asarray(grid.elevation),
            nbinsx=60,
            marker=dict(color="rgba(15, 118, 110, 0.75)"),
        )
    )
    if sea_level is not None:
        fig.add_vline(x=float(sea_level), line=dict(color="#1d4ed8", dash="dash"))
    fig.update_layout(
        height=240,
        margin=dict(l=10, r=10, t=10, b=10),
        xaxis_title="elevation",
        yaxis_title="tiles",
        bargap=0.02,
    )
    return fig
