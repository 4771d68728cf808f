"""
Command-line interface.

Usage:
    py-realms generate --width 1200 --height 800 --count 20 --seed 42
    py-realms stats --count 40 --seed 7

When ``--seed`` is omitted a seed is taken from the clock and logged, so the
run can be reproduced later.
"""

import argparse
import json
import sys
import time
from typing import List, Optional

import structlog
from pydantic import ValidationError

from .config import settings
from .core.colors import terrain_legend
from .core.map_analysis import analyze_territories
from .core.map_generator import GenerationOptions, generate_map
from .core.models import build_map_config
from .exceptions import TerritoryGenerationError
from .export import territories_to_json
from .utils.logging import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-realms", description="Generate procedural territory maps"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--width", type=float, default=settings.default_map_width,
                        help="Map width")
    common.add_argument("--height", type=float, default=settings.default_map_height,
                        help="Map height")
    common.add_argument("--count", type=int, default=settings.default_territory_count,
                        help="Number of territories")
    common.add_argument("--seed", type=int, default=None,
                        help="Generation seed (defaults to the current time)")
    common.add_argument("--iterations", type=int, default=None,
                        help="Lloyd relaxation iterations")
    common.add_argument("--margin", type=float, default=None,
                        help="Inward padding for initial points")
    common.add_argument("--centroid", choices=["vertex_mean", "area"], default="vertex_mean",
                        help="Centroid used during relaxation")
    common.add_argument("--color-mode", choices=["terrain", "palette"], default="terrain",
                        help="Colour territories by terrain or by golden-ratio palette")
    common.add_argument("--indent", type=int, default=None,
                        help="Indent the JSON output")

    subparsers.add_parser("generate", parents=[common],
                          help="Print the territory list as JSON")
    subparsers.add_parser("stats", parents=[common],
                          help="Print map statistics as JSON")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level, settings.log_format)

    seed = args.seed
    if seed is None:
        seed = int(time.time() * 1000)
        logger.info("No seed given, using clock seed", seed=seed)

    try:
        config = build_map_config(
            width=args.width,
            height=args.height,
            territory_count=args.count,
            seed=seed,
        )
        options = GenerationOptions(
            relaxation_iterations=args.iterations,
            edge_margin=args.margin,
            relaxation_centroid=args.centroid,
            color_mode=args.color_mode,
        )
        territories = generate_map(config, options)
    except (TerritoryGenerationError, ValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.command == "generate":
        print(territories_to_json(territories, indent=args.indent))
    else:
        stats = analyze_territories(territories, config.width, config.height)
        report = {
            "seed": seed,
            "statistics": stats.model_dump(mode="json"),
            "legend": {t.value: color for t, color in terrain_legend(seed).items()},
        }
        print(json.dumps(report, indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
