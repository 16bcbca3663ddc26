from __future__ import annotations

import numpy as np

from .noise_2d import Noise2D, Perlin2D, fbm2
from .value_noise_2d import ValueNoise2D

BASES = ("perlin", "value")


class NoiseField:
    """Seeded, stateless 2D coherent noise used as the terrain elevation source.

    The field is fixed at construction: the same instance (or another one built
    with the same arguments) returns the same value for the same coordinate.
    `octaves == 1` is the plain basis; more octaves sum an fBm stack.
    """

    def __init__(
        self,
        *,
        seed: int = 0,
        basis: str = "perlin",
        grad_set: str = "diag8",
        octaves: int = 1,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ):
        self.seed = int(seed)
        self.basis = str(basis)
        self.grad_set = str(grad_set)
        self.octaves = int(octaves)
        self.lacunarity = float(lacunarity)
        self.persistence = float(persistence)

        if self.octaves < 1:
            raise ValueError("octaves must be >= 1")

        self._noise: Noise2D
        if self.basis == "perlin":
            self._noise = Perlin2D(seed=self.seed, grad_set=self.grad_set)
        elif self.basis == "value":
            self._noise = ValueNoise2D(seed=self.seed)
        else:
            raise ValueError(f"unknown basis: {self.basis}")

    def __repr__(self) -> str:
        return (
            f"NoiseField(seed={self.seed}, basis={self.basis!r}, "
            f"grad_set={self.grad_set!r}, octaves={self.octaves})"
        )

    def sample_array(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        if self.octaves == 1:
            return np.asarray(self._noise.noise(x, y), dtype=np.float64)
        return fbm2(
            self._noise,
            x,
            y,
            octaves=self.octaves,
            lacunarity=self.lacunarity,
            persistence=self.persistence,
        )

    def sample(self, x: float, y: float) -> float:
        return float(self.sample_array(np.array([float(x)]), np.array([float(y)]))[0])
