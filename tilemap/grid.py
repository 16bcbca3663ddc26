from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from perlin.field import NoiseField
from tilemap.config import RGB, TerrainConfig
from tilemap.params import SamplingParameters
from tilemap.policy import Classification, make_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridGeometry:
    """Fixed lattice: `width x height` tiles of `tile_width x tile_height`, centred on the origin."""

    width: int = 100
    height: int = 100
    tile_width: float = 10.0
    tile_height: float = 10.0

    def __post_init__(self) -> None:
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError("width and height must be > 0")
        if not (np.isfinite(self.tile_width) and np.isfinite(self.tile_height)):
            raise ValueError("tile size must be finite")
        if self.tile_width <= 0.0 or self.tile_height <= 0.0:
            raise ValueError("tile size must be > 0")

    @classmethod
    def from_config(cls, config: TerrainConfig) -> GridGeometry:
        return cls(
            width=int(config.grid_width),
            height=int(config.grid_height),
            tile_width=float(config.tile_width),
            tile_height=float(config.tile_height),
        )

    @property
    def count(self) -> int:
        return int(self.width) * int(self.height)

    @property
    def tile_size(self) -> tuple[float, float]:
        return (float(self.tile_width), float(self.tile_height))

    def world_positions(self) -> tuple[np.ndarray, np.ndarray]:
        """Flat x/y arrays in row-major order, `i` outer: index `k = i * height + j`."""

        w = int(self.width)
        h = int(self.height)
        tw = float(self.tile_width)
        th = float(self.tile_height)
        xs = np.arange(w, dtype=np.float64) * tw - (w * tw) / 2.0
        ys = np.arange(h, dtype=np.float64) * th - (h * th) / 2.0
        xg, yg = np.meshgrid(xs, ys, indexing="ij")
        return xg.ravel(), yg.ravel()


@dataclass(frozen=True)
class TileClass:
    under_water: bool | None
    blend: float | None
    color: RGB


@dataclass(frozen=True)
class Tile:
    position: tuple[float, float]
    size: tuple[float, float]
    elevation: float
    classification: TileClass


def _frozen(a: np.ndarray | None) -> np.ndarray | None:
    if a is None:
        return None
    a = np.ascontiguousarray(a)
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class Grid:
    """One complete sampling of the lattice.

    Data is column-wise (read-only arrays of length `geometry.count`); indexing
    and iteration build `Tile` values on demand.
    """

    geometry: GridGeometry
    parameters: SamplingParameters
    x: np.ndarray
    y: np.ndarray
    elevation: np.ndarray
    classification: Classification

    def __len__(self) -> int:
        return int(self.elevation.shape[0])

    def __getitem__(self, k: int) -> Tile:
        n = len(self)
        k = int(k)
        if k < 0:
            k += n
        if not 0 <= k < n:
            raise IndexError("tile index out of range")

        c = self.classification
        r, g, b = (float(v) for v in c.rgb[k])
        return Tile(
            position=(float(self.x[k]), float(self.y[k])),
            size=self.geometry.tile_size,
            elevation=float(self.elevation[k]),
            classification=TileClass(
                under_water=None if c.under_water is None else bool(c.under_water[k]),
                blend=None if c.blend is None else float(c.blend[k]),
                color=(r, g, b),
            ),
        )

    def __iter__(self) -> Iterator[Tile]:
        for k in range(len(self)):
            yield self[k]

    def tile_at(self, i: int, j: int) -> Tile:
        w = int(self.geometry.width)
        h = int(self.geometry.height)
        if not (0 <= int(i) < w and 0 <= int(j) < h):
            raise IndexError(f"cell ({i}, {j}) outside {w}x{h} grid")
        return self[int(i) * h + int(j)]

    def _image(self, values: np.ndarray) -> np.ndarray:
        w = int(self.geometry.width)
        h = int(self.geometry.height)
        # [i, j] -> [row, col] with row 0 at the largest y.
        img = values.reshape((w, h) + values.shape[1:]).swapaxes(0, 1)
        return np.ascontiguousarray(img[::-1])

    def elevation_image(self) -> np.ndarray:
        """(height, width) elevation with +y up."""
        return self._image(self.elevation)

    def rgb_image(self) -> np.ndarray:
        """(height, width, 3) classification colors, unclipped."""
        return self._image(self.classification.rgb)

    def under_water_count(self) -> int:
        uw = self.classification.under_water
        return 0 if uw is None else int(np.count_nonzero(uw))


class GridSampler:
    """Turns sampling parameters into a full `Grid`.

    Noise-space coordinate of a tile is `scale * (position + offset)` per axis.
    Positions never depend on the parameters, so they are computed once.
    """

    def __init__(
        self,
        field: NoiseField,
        geometry: GridGeometry,
        *,
        config: TerrainConfig | None = None,
    ):
        self.field = field
        self.geometry = geometry
        self.config = config if config is not None else TerrainConfig()
        self._x, self._y = geometry.world_positions()
        self._x.setflags(write=False)
        self._y.setflags(write=False)

    def world_positions(self) -> tuple[np.ndarray, np.ndarray]:
        return self._x, self._y

    def noise_coordinates(self, parameters: SamplingParameters) -> tuple[np.ndarray, np.ndarray]:
        scale = float(parameters.scale)
        qx = scale * (self._x + float(parameters.offset_x))
        qy = scale * (self._y + float(parameters.offset_y))
        return qx, qy

    def sample(self, parameters: SamplingParameters) -> Grid:
        t0 = time.perf_counter()

        qx, qy = self.noise_coordinates(parameters)
        elevation = self.field.sample_array(qx, qy)
        policy = make_policy(parameters, self.config)
        c = policy.classify(elevation)

        grid = Grid(
            geometry=self.geometry,
            parameters=parameters,
            x=self._x,
            y=self._y,
            elevation=_frozen(elevation),
            classification=Classification(
                under_water=_frozen(c.under_water),
                blend=_frozen(c.blend),
                rgb=_frozen(c.rgb),
            ),
        )

        logger.debug(
            "sampled %dx%d grid in %.2f ms (%s)",
            self.geometry.width,
            self.geometry.height,
            (time.perf_counter() - t0) * 1000.0,
            parameters,
        )
        return grid


def recompute(
    parameters: SamplingParameters,
    *,
    field: NoiseField | None = None,
    geometry: GridGeometry | None = None,
    config: TerrainConfig | None = None,
) -> Grid:
    """One-shot recompute.

    Without a config the mode follows the parameters: threshold when a sea
    level is present, gradient otherwise.
    """

    if config is None:
        config = TerrainConfig(mode="threshold" if parameters.sea_level is not None else "gradient")
    if field is None:
        field = NoiseField(
            seed=config.seed,
            basis=config.basis,
            grad_set=config.grad_set,
            octaves=config.octaves,
        )
    if geometry is None:
        geometry = GridGeometry.from_config(config)
    return GridSampler(field, geometry, config=config).sample(parameters)
