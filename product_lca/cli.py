"""
Command-line interface for the product LCA engine.

Usage:
    product-lca assess product.json --reference-year 2024 --format markdown
    product-lca assess product.json --output result.json

The input file holds ``materials`` and optional ``facility_allocations``,
``reference_year``, ``study_region`` and ``functional_unit``.
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from .config import get_config
from .engine import ProductLCAEngine
from .exceptions import ProductLCAError

logger = logging.getLogger("product-lca")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="product-lca",
        description="Product LCA impact aggregation and data quality assessment",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    assess = subparsers.add_parser(
        "assess",
        help="Aggregate impacts and assess data quality for one product",
    )
    assess.add_argument(
        "input",
        help="Path to product JSON (materials, facility_allocations)",
    )
    assess.add_argument(
        "--reference-year", "-y",
        type=int,
        help="Reference year for temporal representativeness (default: input file, then current year)",
    )
    assess.add_argument(
        "--study-region", "-r",
        help="Region under study, e.g. GB, EU, GLO",
    )
    assess.add_argument(
        "--functional-unit", "-u",
        type=float,
        help="Units of product the facility intensities apply to",
    )
    assess.add_argument(
        "--format", "-f",
        choices=["json", "markdown"],
        default="json",
        help="Output format",
    )
    assess.add_argument(
        "--output", "-o",
        help="Write output to this path instead of stdout",
    )
    assess.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def load_input(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict) or not isinstance(payload.get("materials", []), list):
        raise ProductLCAError(f"{path}: expected an object with a 'materials' list")
    return payload


def run_assess(args, cfg=None) -> int:
    payload = load_input(args.input)

    reference_year = args.reference_year or payload.get("reference_year") or date.today().year
    study_region = args.study_region or payload.get("study_region")
    functional_unit = args.functional_unit or payload.get("functional_unit")

    engine = ProductLCAEngine(cfg)
    assessment = engine.assess(
        payload.get("materials", []),
        payload.get("facility_allocations", []),
        reference_year=int(reference_year),
        study_region=study_region,
        functional_unit=functional_unit,
    )

    if args.format == "markdown":
        output = assessment.statement + "\n"
    else:
        output = json.dumps(assessment.to_dict(), indent=2) + "\n"

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info(f"Wrote {args.format} output to {args.output}")
    else:
        sys.stdout.write(output)
    return 0


def log_level(verbose: bool, cfg) -> int:
    """DEBUG when asked for on the command line or by the active configuration."""
    if verbose or cfg.DEBUG:
        return logging.DEBUG
    return logging.WARNING


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI usage."""
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = get_config()

    logging.basicConfig(
        level=log_level(args.verbose, cfg),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return run_assess(args, cfg)
    except (ProductLCAError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
