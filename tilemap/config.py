from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields

from perlin.core import GRAD2_SETS
from perlin.field import BASES

RGB = tuple[float, float, float]

MODES = ("threshold", "gradient")
BLEND_POLICIES = ("none", "clamp", "wrap")

BLUE: RGB = (0.0, 0.0, 1.0)
GREEN: RGB = (0.0, 128.0 / 255.0, 0.0)
WHITE: RGB = (1.0, 1.0, 1.0)
RED: RGB = (1.0, 0.0, 0.0)


def _rgb(value: object) -> RGB:
    r, g, b = (float(c) for c in value)  # type: ignore[attr-defined]
    return (r, g, b)


@dataclass(frozen=True)
class TerrainConfig:
    """Everything that is chosen once per run and never edited interactively."""

    seed: int = 0
    basis: str = "perlin"
    grad_set: str = "diag8"
    octaves: int = 1
    mode: str = "threshold"
    grid_width: int = 100
    grid_height: int = 100
    tile_width: float = 10.0
    tile_height: float = 10.0
    water_color: RGB = BLUE
    land_color: RGB = GREEN
    low_color: RGB = WHITE
    high_color: RGB = RED
    blend_policy: str = "none"

    def __post_init__(self) -> None:
        if self.basis not in BASES:
            raise ValueError(f"unknown basis: {self.basis}")
        if self.grad_set not in GRAD2_SETS:
            raise ValueError(f"unknown 2D gradient set: {self.grad_set}")
        if int(self.octaves) < 1:
            raise ValueError("octaves must be >= 1")
        if self.mode not in MODES:
            raise ValueError(f"unknown mode: {self.mode}")
        if self.blend_policy not in BLEND_POLICIES:
            raise ValueError(f"unknown blend policy: {self.blend_policy}")
        if int(self.grid_width) <= 0 or int(self.grid_height) <= 0:
            raise ValueError("grid_width and grid_height must be > 0")
        for extent in (self.tile_width, self.tile_height):
            if not (math.isfinite(float(extent)) and float(extent) > 0.0):
                raise ValueError("tile_width and tile_height must be finite and > 0")
        for name in ("water_color", "land_color", "low_color", "high_color"):
            object.__setattr__(self, name, _rgb(getattr(self, name)))

    @property
    def threshold_enabled(self) -> bool:
        return self.mode == "threshold"


def _get(raw: Mapping[str, object], name: str, default: str) -> str:
    value = raw.get(name)
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else default
    return str(value)


def _as_int(raw: Mapping[str, object], name: str, default: int, *, min_value: int, max_value: int) -> int:
    try:
        v = int(float(_get(raw, name, str(default))))
    except (ValueError, OverflowError):
        v = default
    return max(min_value, min(max_value, v))


def _as_float(
    raw: Mapping[str, object], name: str, default: float, *, min_value: float, max_value: float
) -> float:
    try:
        v = float(_get(raw, name, str(default)))
    except ValueError:
        v = default
    if math.isnan(v):
        v = default
    return max(min_value, min(max_value, v))


def _as_choice(raw: Mapping[str, object], name: str, default: str, choices: tuple[str, ...]) -> str:
    v = _get(raw, name, default).strip().lower()
    return v if v in choices else default


def _as_rgb(raw: Mapping[str, object], name: str, default: RGB) -> RGB:
    text = _get(raw, name, "").strip().lstrip("#")
    if len(text) != 6:
        return default
    try:
        return _rgb(int(text[k : k + 2], 16) / 255.0 for k in (0, 2, 4))
    except ValueError:
        return default


def config_from_mapping(raw: Mapping[str, object]) -> TerrainConfig:
    """Build a config from string values (query params, CLI flags).

    Bad or missing entries fall back to defaults and numbers are clamped,
    so this never raises for user-supplied text.
    """

    d = TerrainConfig()
    return TerrainConfig(
        seed=_as_int(raw, "seed", d.seed, min_value=0, max_value=2**31 - 1),
        basis=_as_choice(raw, "basis", d.basis, BASES),
        grad_set=_as_choice(raw, "grad_set", d.grad_set, GRAD2_SETS),
        octaves=_as_int(raw, "octaves", d.octaves, min_value=1, max_value=8),
        mode=_as_choice(raw, "mode", d.mode, MODES),
        grid_width=_as_int(raw, "grid_width", d.grid_width, min_value=1, max_value=512),
        grid_height=_as_int(raw, "grid_height", d.grid_height, min_value=1, max_value=512),
        tile_width=_as_float(raw, "tile_width", d.tile_width, min_value=1.0, max_value=100.0),
        tile_height=_as_float(raw, "tile_height", d.tile_height, min_value=1.0, max_value=100.0),
        water_color=_as_rgb(raw, "water_color", d.water_color),
        land_color=_as_rgb(raw, "land_color", d.land_color),
        low_color=_as_rgb(raw, "low_color", d.low_color),
        high_color=_as_rgb(raw, "high_color", d.high_color),
        blend_policy=_as_choice(raw, "blend_policy", d.blend_policy, BLEND_POLICIES),
    )


def config_to_mapping(config: TerrainConfig) -> dict[str, str]:
    """Inverse of `config_from_mapping` for sharing a run as query params."""

    out: dict[str, str] = {}
    for f in fields(config):
        value = getattr(config, f.name)
        if f.name.endswith("_color"):
            out[f.name] = "".join(f"{int(round(c * 255.0)):02x}" for c in value)
        else:
            out[f.name] = str(value)
    return out
