import io

import numpy as np
import pytest
from PIL import Image

from tilemap.config import BLUE, GREEN, TerrainConfig
from tilemap.grid import GridGeometry, recompute
from tilemap.params import SamplingParameters
from viz.export import array_to_npy_bytes, elevation_to_png_bytes, grid_to_png_bytes, rgb_to_png_bytes


def test_grid_to_png_bytes_size_and_colors():
    params = SamplingParameters(scale=0.01, offset_x=0.0, offset_y=0.0, sea_level=0.0)
    grid = recompute(params, geometry=GridGeometry(width=8, height=5))
    data = grid_to_png_bytes(grid, pixels_per_tile=3)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"

    img = Image.open(io.BytesIO(data))
    assert img.size == (24, 15)

    colors = {tuple(c) for c in np.array(img.convert("RGB")).reshape(-1, 3).tolist()}
    allowed = {tuple(int(round(v * 255)) for v in BLUE), tuple(int(round(v * 255)) for v in GREEN)}
    assert colors <= allowed


def test_rgb_to_png_bytes_clips_out_of_gamut():
    rgb = np.array([[[-0.5, 0.5, 1.5]]], dtype=np.float64)
    img = Image.open(io.BytesIO(rgb_to_png_bytes(rgb)))
    assert np.array(img.convert("RGB"))[0, 0].tolist() == [0, 128, 255]


def test_rgb_to_png_bytes_rejects_bad_shape():
    with pytest.raises(ValueError):
        rgb_to_png_bytes(np.zeros((4, 4)))


def test_gradient_grid_png_renders():
    config = TerrainConfig(mode="gradient", grid_width=10, grid_height=10)
    grid = recompute(SamplingParameters(scale=0.01, offset_x=3.0, offset_y=9.0), config=config)
    img = Image.open(io.BytesIO(grid_to_png_bytes(grid)))
    assert img.size == (10, 10)


def test_elevation_to_png_bytes_constant_map():
    z = np.full((5, 6), 7.0, dtype=np.float64)
    img = Image.open(io.BytesIO(elevation_to_png_bytes(z)))
    arr = np.array(img)
    assert img.size == (6, 5)
    assert arr.min() == 0
    assert arr.max() == 0


def test_array_to_npy_bytes_roundtrip():
    z = np.arange(6, dtype=np.int32).reshape(2, 3)
    data = array_to_npy_bytes(z)
    out = np.load(io.BytesIO(data))
    assert np.array_equal(out, z)
