from __future__ import annotations

from typing import Protocol

import numpy as np

from .core import corner_hashes, fade, grad2_from_hash, grad2_table, lattice_cells, lerp, make_permutation


class Noise2D(Protocol):
    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


class Perlin2D:
    """Improved gradient noise. Zero at every integer lattice point."""

    def __init__(self, *, seed: int = 0, grad_set: str = "diag8"):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)
        self.grad_set = str(grad_set)
        self.grad_table = grad2_table(self.grad_set)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        xi, yi, xf, yf = lattice_cells(x, y)
        u = fade(xf)
        v = fade(yf)
        aa, ab, ba, bb = corner_hashes(self.perm, xi, yi)

        def dot(h: np.ndarray, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
            gx, gy = grad2_from_hash(h, grad_table=self.grad_table)
            return gx * dx + gy * dy

        d00 = dot(aa, xf, yf)
        d01 = dot(ab, xf, yf - 1.0)
        d10 = dot(ba, xf - 1.0, yf)
        d11 = dot(bb, xf - 1.0, yf - 1.0)

        return lerp(lerp(d00, d10, u), lerp(d01, d11, u), v)


def fbm2(
    noise: Noise2D,
    x: np.ndarray,
    y: np.ndarray,
    *,
    octaves: int = 4,
    lacunarity: float = 2.0,
    persistence: float = 0.5,
) -> np.ndarray:
    """Fractal sum of `octaves` noise layers, normalised by the amplitude sum."""

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    octaves = int(octaves)
    lacunarity = float(lacunarity)
    persistence = float(persistence)

    amp = 1.0
    freq = 1.0
    total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amp_sum = 0.0

    for _ in range(max(octaves, 1)):
        total += amp * noise.noise(x * freq, y * freq)
        amp_sum += amp
        amp *= persistence
        freq *= lacunarity

    if amp_sum == 0.0:
        return total
    return total / amp_sum
