from .field import BASES, NoiseField
from .noise_2d import Perlin2D, fbm2
from .value_noise_2d import ValueNoise2D

__all__ = ["BASES", "NoiseField", "Perlin2D", "ValueNoise2D", "fbm2"]
