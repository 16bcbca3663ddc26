from __future__ import annotations

import numpy as np

from tilemap.config import TerrainConfig
from tilemap.grid import recompute
from tilemap.session import TerrainSession


def _small(**kwargs) -> TerrainConfig:
    return TerrainConfig(grid_width=16, grid_height=12, **kwargs)


def test_session_first_grid_uses_defaults() -> None:
    s = TerrainSession(_small())
    grid = s.grid()
    assert len(grid) == 16 * 12
    assert grid.parameters == s.parameters()
    assert s.recompute_count == 1
    assert not s.store.dirty


def test_session_recomputes_only_when_dirty() -> None:
    s = TerrainSession(_small())
    first = s.grid()
    assert s.grid() is first
    assert s.recompute_count == 1

    assert s.apply_edit("scale", 0.01) is False  # unchanged
    assert s.grid() is first

    assert s.apply_edit("offset_x", 40.0) is True
    second = s.grid()
    assert second is not first
    assert second.parameters.offset_x == 40.0
    assert s.recompute_count == 2


def test_session_several_edits_one_recompute() -> None:
    s = TerrainSession(_small())
    s.grid()
    s.apply_edit("offset_x", 10.0)
    s.apply_edit("offset_y", 20.0)
    s.apply_edit("sea_level", -0.25)
    s.grid()
    assert s.recompute_count == 2


def test_session_matches_one_shot_recompute() -> None:
    config = _small(seed=21, octaves=2)
    s = TerrainSession(config)
    s.apply_edit("scale", 0.0042)
    s.apply_edit("offset_y", 777.0)
    grid = s.grid()
    expected = recompute(s.parameters(), config=config)
    assert np.array_equal(grid.elevation, expected.elevation)
    assert np.array_equal(grid.classification.rgb, expected.classification.rgb)


def test_session_out_of_range_edit_is_clamped_not_raised() -> None:
    s = TerrainSession(_small())
    s.apply_edit("sea_level", 50.0)
    s.apply_edit("offset_x", float("nan"))
    grid = s.grid()
    assert grid.parameters.sea_level == 1.0
    assert grid.parameters.offset_x == 0.0
    assert grid.under_water_count() == len(grid)


def test_gradient_session_has_no_sea_level() -> None:
    s = TerrainSession(_small(mode="gradient", blend_policy="clamp"))
    assert [spec.name for spec in s.store.specs()] == ["scale", "offset_x", "offset_y"]
    grid = s.grid()
    assert grid.parameters.sea_level is None
    assert grid.classification.blend is not None
    assert float(grid.classification.blend.min()) >= 0.0
    assert float(grid.classification.blend.max()) <= 1.0
