from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tilemap.config import BLEND_POLICIES, MODES, config_from_mapping
from tilemap.params import parameter_specs
from tilemap.session import TerrainSession
from viz.export import grid_to_png_bytes

logger = logging.getLogger("render_map")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Render one tile terrain grid to a PNG file.")
    p.add_argument("output", type=Path)
    p.add_argument("--seed", default="0")
    p.add_argument("--basis", default="perlin")
    p.add_argument("--octaves", default="1")
    p.add_argument("--mode", choices=MODES, default="threshold")
    p.add_argument("--blend-policy", choices=BLEND_POLICIES, default="none")
    p.add_argument("--pixels-per-tile", type=int, default=4)
    for spec in parameter_specs():
        p.add_argument(
            f"--{spec.name.replace('_', '-')}",
            type=float,
            default=None,
            help=f"{spec.label} in [{spec.min_value}, {spec.max_value}] (default {spec.default})",
        )
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = config_from_mapping(
        {
            "seed": args.seed,
            "basis": args.basis,
            "octaves": args.octaves,
            "mode": args.mode,
            "blend_policy": args.blend_policy,
        }
    )
    session = TerrainSession(config)
    for spec in session.store.specs():
        value = getattr(args, spec.name)
        if value is not None:
            session.apply_edit(spec.name, value)

    grid = session.grid()
    args.output.write_bytes(grid_to_png_bytes(grid, pixels_per_tile=args.pixels_per_tile))
    logger.info("wrote %d tiles to %s (%s)", len(grid), args.output, grid.parameters)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
