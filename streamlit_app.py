from __future__ import annotations

import logging
from typing import cast

import streamlit as st

from tilemap.config import TerrainConfig, config_from_mapping, config_to_mapping
from tilemap.params import ParameterSpec
from tilemap.session import TerrainSession
from ui.styles import inject_global_styles
from viz.export import array_to_npy_bytes, elevation_to_png_bytes, grid_to_png_bytes
from viz.figures import elevation_histogram, tile_map_figure

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Tile Terrain",
    page_icon="~",
    layout="wide",
)

inject_global_styles()


def _query_config() -> TerrainConfig:
    try:
        raw = {k: st.query_params.get(k) for k in st.query_params.keys()}
    except Exception:
        logger.warning("query params unavailable, using defaults", exc_info=True)
        raw = {}
    return config_from_mapping(raw)


def _session(config: TerrainConfig) -> TerrainSession:
    # One session per config; switching mode/seed in the URL starts a fresh one.
    key = ("terrain_session", config)
    stored = st.session_state.get("terrain_session")
    if stored is None or stored[0] != key:
        session = TerrainSession(config)
        st.session_state["terrain_session"] = (key, session)
        # Slider state outlives the session; reseat it on the new store.
        for spec in session.store.specs():
            st.session_state[f"param_{spec.name}"] = float(session.store.get(spec.name))
    return cast(TerrainSession, st.session_state["terrain_session"][1])


def _on_slider_change(session: TerrainSession, name: str, widget_key: str) -> None:
    session.apply_edit(name, st.session_state[widget_key])


def _slider(session: TerrainSession, spec: ParameterSpec) -> None:
    widget_key = f"param_{spec.name}"
    if widget_key not in st.session_state:
        st.session_state[widget_key] = float(session.store.get(spec.name))
    st.slider(
        spec.label,
        min_value=float(spec.min_value),
        max_value=float(spec.max_value),
        step=float(spec.step),
        format="%.4f" if spec.step < 0.01 else "%.2f",
        key=widget_key,
        on_change=_on_slider_change,
        args=(session, spec.name, widget_key),
    )


def _reset(session: TerrainSession) -> None:
    session.store.reset()
    for spec in session.store.specs():
        st.session_state[f"param_{spec.name}"] = float(spec.default)


config = _query_config()
session = _session(config)

with st.sidebar:
    st.subheader("Sampling")
    for spec in session.store.specs():
        _slider(session, spec)
    st.button("Reset", on_click=_reset, args=(session,), width="stretch")

    with st.expander("Run settings"):
        st.caption("Fixed for this session; change them through the URL.")
        st.json(config_to_mapping(config))

grid = session.grid()
params = grid.parameters

st.title("Tile Terrain")

left, right = st.columns([3, 1])
with left:
    st.plotly_chart(tile_map_figure(grid), width="stretch")

with right:
    st.metric("Tiles", f"{len(grid):,}")
    if config.threshold_enabled:
        share = grid.under_water_count() / max(len(grid), 1)
        st.metric("Under water", f"{share:.1%}")
    st.metric("Recomputes", session.recompute_count)
    st.plotly_chart(
        elevation_histogram(grid, sea_level=params.sea_level),
        width="stretch",
    )
    st.download_button(
        "Tiles PNG",
        data=grid_to_png_bytes(grid, pixels_per_tile=4),
        file_name="tiles.png",
        mime="image/png",
        width="stretch",
    )
    st.download_button(
        "Elevation PNG",
        data=elevation_to_png_bytes(grid.elevation_image()),
        file_name="elevation.png",
        mime="image/png",
        width="stretch",
    )
    st.download_button(
        "Elevation NPY",
        data=array_to_npy_bytes(grid.elevation_image()),
        file_name="elevation.npy",
        mime="application/octet-stream",
        width="stretch",
    )
