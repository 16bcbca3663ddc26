from __future__ import annotations

import numpy as np

PERIOD = 256


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve 6t^5 - 15t^4 + 10t^3 (zero first/second derivative at 0 and 1)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def make_permutation(seed: int) -> np.ndarray:
    """Shuffled 0..255 table, doubled so `p[p[i] + j]` never needs a wrap."""
    rng = np.random.default_rng(int(seed))
    p = rng.permutation(PERIOD).astype(np.int32)
    return np.concatenate([p, p])


def lattice_cells(
    x: np.ndarray, y: np.ndarray
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Split coordinates into wrapped integer cell indices and in-cell offsets."""
    x0 = np.floor(x)
    y0 = np.floor(y)
    xi = x0.astype(np.int64) & (PERIOD - 1)
    yi = y0.astype(np.int64) & (PERIOD - 1)
    return xi, yi, x - x0, y - y0


def corner_hashes(
    perm: np.ndarray, xi: np.ndarray, yi: np.ndarray
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    xi1 = (xi + 1) & (PERIOD - 1)
    yi1 = (yi + 1) & (PERIOD - 1)
    aa = perm[perm[xi] + yi]
    ab = perm[perm[xi] + yi1]
    ba = perm[perm[xi1] + yi]
    bb = perm[perm[xi1] + yi1]
    return aa, ab, ba, bb


def _unit_rows(rows: list[list[float]]) -> np.ndarray:
    g = np.array(rows, dtype=np.float64)
    g /= np.linalg.norm(g, axis=1, keepdims=True)
    return g


_GRAD2_TABLES: dict[str, np.ndarray] = {
    "diag8": _unit_rows(
        [
            [1.0, 0.0],
            [-1.0, 0.0],
            [0.0, 1.0],
            [0.0, -1.0],
            [1.0, 1.0],
            [-1.0, 1.0],
            [1.0, -1.0],
            [-1.0, -1.0],
        ]
    ),
    "axis4": _unit_rows([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]]),
    "circle16": np.stack(
        [
            np.cos(np.linspace(0.0, 2.0 * np.pi, 16, endpoint=False)),
            np.sin(np.linspace(0.0, 2.0 * np.pi, 16, endpoint=False)),
        ],
        axis=1,
    ),
}
GRAD2_SETS = tuple(_GRAD2_TABLES)


def grad2_table(name: str) -> np.ndarray:
    name = str(name)
    try:
        return _GRAD2_TABLES[name]
    except KeyError:
        raise ValueError(f"unknown 2D gradient set: {name}") from None


def grad2_from_hash(
    h: np.ndarray, *, grad_table: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    g = grad_table[h % grad_table.shape[0]]
    return g[..., 0], g[..., 1]
