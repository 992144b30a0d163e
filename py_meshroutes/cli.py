"""Command line entry point: generate a route map and write it as PNG."""

import argparse
import sys
from typing import List, Optional

import structlog
from pydantic import ValidationError

from .config import Settings
from .core.pipeline import generate_route_map
from .logging_config import configure_logging
from .render.rasterizer import render_route_map

logger = structlog.get_logger()

# CLI flag -> Settings field
_OVERRIDES = {
    "seed": "seed",
    "output": "output_path",
    "iterations": "iterations",
    "width": "canvas_width",
    "height": "canvas_height",
    "start": "start",
    "goal": "goal",
    "min_distance": "min_distance",
    "max_distance": "max_distance",
    "tries": "tries",
    "log_level": "log_level",
    "log_format": "log_format",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-meshroutes",
        description="Generate diverging shortest routes over a random Delaunay mesh",
    )
    parser.add_argument("--seed", help="PRNG seed for a reproducible map")
    parser.add_argument("--output", help="PNG output path (default: image.png)")
    parser.add_argument("--iterations", type=int, help="Maximum number of routes")
    parser.add_argument("--width", type=int, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, help="Canvas height in pixels")
    parser.add_argument("--start", type=float, nargs=2, metavar=("X", "Y"),
                        help="Start coordinates (default: derived from the canvas)")
    parser.add_argument("--goal", type=float, nargs=2, metavar=("X", "Y"),
                        help="Goal coordinates (default: derived from the canvas)")
    parser.add_argument("--min-distance", type=float, help="Minimum point spacing")
    parser.add_argument("--max-distance", type=float, help="Maximum candidate distance")
    parser.add_argument("--tries", type=int, help="Sampling candidates per active point")
    parser.add_argument("--log-level", help="Logging level")
    parser.add_argument("--log-format", choices=["plain", "json"], help="Logging format")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = {
        field: getattr(args, flag)
        for flag, field in _OVERRIDES.items()
        if getattr(args, flag) is not None
    }

    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_format)

    route_map = generate_route_map(settings)
    path = render_route_map(
        settings.canvas_width,
        settings.canvas_height,
        route_map.node_tags(),
        route_map.routes.segments,
        settings.output_path,
    )

    logger.info("Route map written", path=str(path), seed=route_map.seed,
                routes=route_map.routes.iterations,
                points=len(route_map.points))
    return 0


if __name__ == "__main__":
    sys.exit(main())
