from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from tilemap.config import BLEND_POLICIES, BLUE, GREEN, RED, RGB, WHITE, TerrainConfig
from tilemap.params import SamplingParameters


@dataclass(frozen=True)
class Classification:
    """Per-sample classification, shaped like the elevation input.

    `under_water` is only set by the threshold variant and `blend` only by the
    gradient variant. `rgb` always has a trailing axis of 3 and is not clipped.
    """

    under_water: np.ndarray | None
    blend: np.ndarray | None
    rgb: np.ndarray


class ElevationPolicy(Protocol):
    def classify(self, elevation: np.ndarray | float) -> Classification:  # pragma: no cover
        ...


def _color(c: RGB) -> np.ndarray:
    return np.asarray(c, dtype=np.float64).reshape(3)


class ThresholdClassifier:
    """Binary water/land split: a sample is under water iff `elevation < sea_level`."""

    def __init__(
        self,
        sea_level: float,
        *,
        water_color: RGB = BLUE,
        land_color: RGB = GREEN,
    ):
        self.sea_level = float(sea_level)
        self.water_color = _color(water_color)
        self.land_color = _color(land_color)

    def classify(self, elevation: np.ndarray | float) -> Classification:
        e = np.asarray(elevation, dtype=np.float64)
        under = e < self.sea_level
        rgb = np.where(under[..., None], self.water_color, self.land_color)
        return Classification(under_water=under, blend=None, rgb=rgb)


def blend_factor(elevation: np.ndarray | float, policy: str = "none") -> np.ndarray:
    """Map raw elevation to a color mix ratio.

    - "none": elevation as-is; values outside [0, 1] extrapolate past the end colors.
    - "clamp": clipped to [0, 1].
    - "wrap": elevation mod 1, always in [0, 1).
    """

    e = np.asarray(elevation, dtype=np.float64)
    if policy == "none":
        return e.copy()
    if policy == "clamp":
        return np.clip(e, 0.0, 1.0)
    if policy == "wrap":
        return np.mod(e, 1.0)
    raise ValueError(f"unknown blend policy: {policy}")


class GradientClassifier:
    """Continuous coloring: `mix(low_color, high_color, blend_factor(elevation))`."""

    def __init__(
        self,
        low_color: RGB = WHITE,
        high_color: RGB = RED,
        *,
        blend_policy: str = "none",
    ):
        if blend_policy not in BLEND_POLICIES:
            raise ValueError(f"unknown blend policy: {blend_policy}")
        self.low_color = _color(low_color)
        self.high_color = _color(high_color)
        self.blend_policy = str(blend_policy)

    def classify(self, elevation: np.ndarray | float) -> Classification:
        t = blend_factor(elevation, self.blend_policy)
        rgb = self.low_color + (self.high_color - self.low_color) * t[..., None]
        return Classification(under_water=None, blend=t, rgb=rgb)


def make_policy(parameters: SamplingParameters, config: TerrainConfig) -> ElevationPolicy:
    """Build the configured variant for one recompute."""

    if config.mode == "threshold":
        if parameters.sea_level is None:
            raise ValueError("threshold mode needs a sea_level parameter")
        return ThresholdClassifier(
            parameters.sea_level,
            water_color=config.water_color,
            land_color=config.land_color,
        )
    if config.mode == "gradient":
        return GradientClassifier(
            config.low_color,
            config.high_color,
            blend_policy=config.blend_policy,
        )
    raise ValueError(f"unknown mode: {config.mode}")
