from __future__ import annotations

import time

from perlin.field import NoiseField
from tilemap.config import TerrainConfig
from tilemap.grid import GridGeometry, GridSampler
from tilemap.params import SamplingParameters, default_parameters


def _timeit(label: str, fn, *, repeat: int = 20) -> float:
    fn()  # warm-up
    t0 = time.perf_counter()
    for _ in range(repeat):
        fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0 / repeat
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark.

    Intended target (laptop-class CPU): one 100x100 recompute well under a
    frame (~16ms) so slider drags stay smooth.
    """

    params = default_parameters()
    for mode, octaves in [("threshold", 1), ("gradient", 1), ("threshold", 4)]:
        config = TerrainConfig(mode=mode, octaves=octaves)
        sampler = GridSampler(
            NoiseField(seed=0, octaves=octaves),
            GridGeometry.from_config(config),
            config=config,
        )
        _timeit(f"recompute 100x100 {mode} octaves={octaves}", lambda: sampler.sample(params))

    big = GridGeometry(width=512, height=512, tile_width=2.0, tile_height=2.0)
    sampler = GridSampler(NoiseField(seed=0), big)
    drag = SamplingParameters(scale=0.005, offset_x=123.0, offset_y=456.0, sea_level=0.0)
    _timeit("recompute 512x512 threshold", lambda: sampler.sample(drag), repeat=5)


if __name__ == "__main__":
    main()
