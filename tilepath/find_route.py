#!/usr/bin/env python3
"""
Golden point route finder.

Reads a map file, searches every ordered pair of golden points and writes the
best path as ``tile_id x y`` lines.

Usage:
    python -m tilepath.find_route input.txt --output output.txt
    tilepath input.txt --objective min --algorithm dijkstra -v
"""

import argparse
import logging
import sys

from .constants import (
    ALGORITHM_CHOICES,
    DEFAULT_INPUT_FILE,
    DEFAULT_OUTPUT_FILE,
    OBJECTIVE_CHOICES,
)
from .errors import TilepathError
from .map_loader import load_map
from .path_export import write_path
from .planning import RoutePlanner
from .search_config import SearchConfig

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_PATH = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the best-scoring route between golden points",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Maximise the route score (default) and write output.txt
  tilepath input.txt

  # Keep the lowest-scoring route and cross-check with Dijkstra
  tilepath input.txt --objective min --algorithm dijkstra --output best.txt
        """,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT_FILE,
        help=f"Map file to read (default: {DEFAULT_INPUT_FILE})",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_FILE,
        help=f"Path file to write (default: {DEFAULT_OUTPUT_FILE})",
    )
    parser.add_argument(
        "--objective",
        choices=OBJECTIVE_CHOICES,
        default="max",
        help="Keep the highest (max) or lowest (min) scoring route (default: max)",
    )
    parser.add_argument(
        "--algorithm",
        choices=ALGORITHM_CHOICES,
        default="astar",
        help="Pathfinding algorithm (default: astar)",
    )
    parser.add_argument(
        "--default-tile",
        default=None,
        help="Tile id for cells without a placement (default: first tile defined)",
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        default=None,
        help="Give up a single search after expanding this many nodes",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    config = SearchConfig.from_args(args)

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Running with %r", config)

    try:
        grid_map = load_map(args.input, default_tile=config.default_tile)
    except (OSError, TilepathError) as e:
        logger.error("Could not load %s: %s", args.input, e)
        return EXIT_ERROR

    print(f"Width: {grid_map.width}")
    print(f"Height: {grid_map.height}")
    print(f"Number of Golden Points: {len(grid_map.golden_points)}")
    print(f"Number of Silver Points: {len(grid_map.silver_points)}")

    try:
        planner = RoutePlanner.from_config(grid_map, config)
        best = planner.plan()
        if best is None:
            print("No path found between the golden points.")
            return EXIT_NO_PATH
        write_path(best.path, grid_map, config.output_path)
    except (OSError, TilepathError) as e:
        logger.error("Route search failed: %s", e)
        return EXIT_ERROR

    print(
        f"Path found between the golden points: {tuple(best.start)} -> {tuple(best.goal)}, "
        f"score {best.score}, {len(best.path)} cells, written to {config.output_path}"
    )
    return EXIT_FOUND


if __name__ == "__main__":
    sys.exit(main())
