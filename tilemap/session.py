from __future__ import annotations

import logging

from perlin.field import NoiseField
from tilemap.config import TerrainConfig
from tilemap.grid import Grid, GridGeometry, GridSampler
from tilemap.params import ParameterStore, SamplingParameters

logger = logging.getLogger(__name__)


class TerrainSession:
    """Model side of the explorer: parameter edits in, complete grids out.

    `grid()` re-samples only when an edit changed a parameter since the last
    call; otherwise the previous grid object is returned unchanged.
    """

    def __init__(self, config: TerrainConfig | None = None):
        self.config = config if config is not None else TerrainConfig()
        self.field = NoiseField(
            seed=self.config.seed,
            basis=self.config.basis,
            grad_set=self.config.grad_set,
            octaves=self.config.octaves,
        )
        self.geometry = GridGeometry.from_config(self.config)
        self.store = ParameterStore(threshold=self.config.threshold_enabled)
        self.sampler = GridSampler(self.field, self.geometry, config=self.config)
        self.recompute_count = 0
        self._grid: Grid | None = None

    def apply_edit(self, name: str, value: float) -> bool:
        return self.store.set_parameter(name, value)

    def parameters(self) -> SamplingParameters:
        return self.store.parameters()

    def grid(self) -> Grid:
        if self._grid is None or self.store.dirty:
            params = self.store.parameters()
            self._grid = self.sampler.sample(params)
            self.store.mark_clean()
            self.recompute_count += 1
            logger.debug("recompute #%d", self.recompute_count)
        return self._grid
