"""CLI: perceptual distance between two colors.

Parses both colors, converts them as needed and prints CIEDE2000 and/or
Oklab distance. Settings come from a colordist.v1 YAML config; CLI flags
override it.

CLI:
    python scripts/compare_colors.py '#ff0000' '#00ff00'
    python scripts/compare_colors.py 'rgb(200, 100, 50)' 'lab(52.1, 30, 41)' --metric all
    python scripts/compare_colors.py '#ff0000' '#fe0101' --config configs/colordist.v1.yaml --json
    python scripts/compare_colors.py --write-config configs/colordist.v1.yaml

Exit codes:
    0 success, 2 invalid input or config
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from colordist.compare import METRICS, compare_colors, format_report
from colordist.utils import validators
from colordist.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Perceptual distance between two colors (CIEDE2000 / Oklab)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Color formats:
  #RRGGBB, #AARRGGBB, 0xAARRGGBB
  rgb(r, g, b[, a])        integers 0-255
  lab(L, a, b[, alpha])    CIE Lab (D65), alpha 0-1
""",
    )
    parser.add_argument("color_a", nargs="?", help="First color")
    parser.add_argument("color_b", nargs="?", help="Second color")
    parser.add_argument(
        "--metric",
        choices=METRICS,
        default=None,
        help="Distance to report (default: from config, else cie2000)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"colordist.v1 YAML config (default: {validators.DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    parser.add_argument(
        "--write-config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write the effective config to PATH and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _load_config(path: Optional[Path]) -> validators.ColorDistConfigV1:
    if path is not None:
        return validators.load_config(path)
    if validators.DEFAULT_CONFIG_PATH.exists():
        return validators.load_config(validators.DEFAULT_CONFIG_PATH)
    return validators.default_config()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for color comparison."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = _load_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        setup_logging(log_level="ERROR", color=False)
        logger.error("%s", e)
        return 2

    log_kwargs = cfg.logging.setup_kwargs()
    if args.verbose:
        log_kwargs["log_level"] = "DEBUG"
    setup_logging(**log_kwargs, context={"app": "compare"})

    if args.write_config is not None:
        try:
            validators.dump_config(cfg, args.write_config)
        except RuntimeError as e:
            logger.error("%s", e)
            return 2
        logger.info("Wrote config to %s", args.write_config)
        return 0

    if args.color_a is None or args.color_b is None:
        parser.print_usage(sys.stderr)
        logger.error("Two colors are required")
        return 2

    metric = args.metric or cfg.metric
    try:
        result = compare_colors(args.color_a, args.color_b, metric=metric, weights=cfg.weights)
    except ValueError as e:
        logger.error("%s", e)
        return 2

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(format_report(result, precision=cfg.precision))
    return 0


if __name__ == "__main__":
    sys.exit(main())
