from __future__ import annotations

import io

import numpy as np
from PIL import Image

from tilemap.grid import Grid


def rgb_to_png_bytes(rgb: np.ndarray, *, pixels_per_tile: int = 1) -> bytes:
    """Encode an (H, W, 3) float image as PNG.

    Colors are clipped to [0, 1] here, so out-of-gamut gradient blends
    saturate instead of wrapping around in uint8.
    """

    rgb = np.asarray(rgb, dtype=np.float64)
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError("expected an HxWx3 array")

    k = max(int(pixels_per_tile), 1)
    img = np.clip(np.round(rgb * 255.0), 0.0, 255.0).astype(np.uint8)
    if k > 1:
        img = np.repeat(np.repeat(img, k, axis=0), k, axis=1)

    out = io.BytesIO()
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()


def grid_to_png_bytes(grid: Grid, *, pixels_per_tile: int = 1) -> bytes:
    return rgb_to_png_bytes(grid.rgb_image(), pixels_per_tile=pixels_per_tile)


def elevation_to_png_bytes(z: np.ndarray) -> bytes:
    """8-bit grayscale PNG, min/max normalized. Constant maps become all zeros."""

    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")

    zmin = float(np.min(z))
    zmax = float(np.max(z))
    if zmax == zmin:
        img = np.zeros(z.shape, dtype=np.uint8)
    else:
        zn = (z - zmin) / (zmax - zmin)
        img = np.clip(zn * 255.0, 0.0, 255.0).astype(np.uint8)

    out = io.BytesIO()
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()


def array_to_npy_bytes(z: np.ndarray) -> bytes:
    out = io.BytesIO()
    np.save(out, np.asarray(z))
    return out.getvalue()
