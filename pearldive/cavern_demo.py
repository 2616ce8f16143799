"""Small demonstration harness for the cavern core."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .src.generation import (
    CavernGenerator,
    collect_cavern_metrics,
    export_cavern_metrics,
    load_generation_config,
    load_level_settings,
    render_ascii,
)
from .level import build_navigation_grid

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a pearldive cavern, print it and plan a path through it.",
    )
    parser.add_argument("--width", type=int, default=50, help="Cavern width in cells")
    parser.add_argument("--height", type=int, default=50, help="Cavern height in cells")
    parser.add_argument("--seed", type=int, default=None, help="Generation seed (defaults to $PEARLDIVE_SEED)")
    parser.add_argument("--max-attempts", type=int, default=None, help="Generation retry budget")
    parser.add_argument("--config-dir", default=None, help="Directory holding cavern.json and navigation.json")
    parser.add_argument("--path", action="store_true", help="Plan a path between the first and last open cells")
    parser.add_argument("--seeds", type=int, nargs="*", default=None, help="Seeds to sample for --metrics-out")
    parser.add_argument("--metrics-out", default=None, help="Write per-seed generation metrics to this JSON file")
    parser.add_argument("--verbose", action="store_true", help="Log every generation attempt")
    return parser


def run(args: argparse.Namespace) -> int:
    settings = load_level_settings(args.config_dir)
    run_config = load_generation_config()
    seed = args.seed if args.seed is not None else run_config.seed
    max_attempts = args.max_attempts if args.max_attempts is not None else run_config.max_attempts

    generator = CavernGenerator.from_settings(args.width, args.height, settings.cavern)
    grid = generator.generate(max_attempts, seed)
    print(render_ascii(grid))
    print(
        f"attempts={generator.last_attempts} validated={generator.last_validated} "
        f"open_ratio={generator.open_ratio():.3f}"
    )

    if args.path:
        tile = settings.cavern.tile_size
        navigation = build_navigation_grid(grid, settings)
        open_positions = generator.get_open_positions()
        if not open_positions:
            print("No open cells to route between")
        else:
            first, last = open_positions[0], open_positions[-1]
            waypoints = navigation.find_path(
                (first.x + 0.5) * tile,
                (first.y + 0.5) * tile,
                (last.x + 0.5) * tile,
                (last.y + 0.5) * tile,
            )
            if waypoints is None:
                print(f"No path from ({first.x}, {first.y}) to ({last.x}, {last.y})")
            else:
                print(f"Path from ({first.x}, {first.y}) to ({last.x}, {last.y}): {len(waypoints)} waypoints")

    if args.metrics_out:
        seeds: List[int] = list(args.seeds) if args.seeds else [seed if seed is not None else 0]
        summary = collect_cavern_metrics(
            seeds=seeds,
            settings=settings.cavern,
            width=args.width,
            height=args.height,
            max_attempts=max_attempts,
        )
        export_cavern_metrics(summary, filepath=args.metrics_out)
        LOGGER.info("Wrote metrics for %d seed(s) to %s", len(seeds), args.metrics_out)

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # //1.- Enable a default logging configuration suitable for terminal output.
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(message)s",
    )
    try:
        return run(args)
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
