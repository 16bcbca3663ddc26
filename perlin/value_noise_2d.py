from __future__ import annotations

import numpy as np

from .core import PERIOD, corner_hashes, fade, lattice_cells, lerp, make_permutation


def _hash_to_unit(h: np.ndarray) -> np.ndarray:
    # 0..255 -> [-1, 1]
    return (h.astype(np.float64) / float(PERIOD - 1)) * 2.0 - 1.0


class ValueNoise2D:
    """2D value noise (lattice values + smooth interpolation)."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        xi, yi, xf, yf = lattice_cells(x, y)
        u = fade(xf)
        v = fade(yf)
        aa, ab, ba, bb = (_hash_to_unit(h) for h in corner_hashes(self.perm, xi, yi))

        return lerp(lerp(aa, ba, u), lerp(ab, bb, u), v)
