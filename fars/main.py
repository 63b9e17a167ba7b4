"""
Command-line entry point: monthly fatality summaries and per-state maps.

    fars --data-dir data/ summarize 2013 2014 2015
    fars map 1 2015 --output alabama_2015.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import resolve_data_dir
from .errors import FarsError
from .mapping import map_state
from .plotting import create_state_map
from .summary import render_summary, summarize_years

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fars",
        description="Summarize FARS accident files by month and map accidents by state.",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding accident_<year>.csv.bz2 files "
        "(default: $FARS_DATA_DIR, else ./data in the repository).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    summarize = sub.add_parser("summarize", help="Fatalities by month for each year.")
    summarize.add_argument("years", nargs="+", help="Four-digit years.")
    summarize.add_argument(
        "--all-months",
        action="store_true",
        help="Keep a row for every month even when no year has data for it.",
    )

    map_ = sub.add_parser("map", help="Accident locations for one state and year.")
    map_.add_argument("state", help="FARS numeric state code.")
    map_.add_argument("year", help="Four-digit year.")
    map_.add_argument(
        "--output",
        default=None,
        help="Write the map to this HTML file.",
    )
    return parser.parse_args(argv)


def run_summarize(args: argparse.Namespace) -> int:
    data_dir = resolve_data_dir(args.data_dir)
    logger.debug("Reading accident files from %s", data_dir)
    matrix = summarize_years(args.years, data_dir, all_months=args.all_months)
    print(render_summary(matrix))
    return 0


def run_map(args: argparse.Namespace) -> int:
    data_dir = resolve_data_dir(args.data_dir)
    logger.debug("Reading accident files from %s", data_dir)
    try:
        state_map = map_state(args.state, args.year, data_dir)
    except (FarsError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if state_map is None:
        print("no accidents to plot")
        return 0

    viewport = state_map.viewport
    print(f"{len(state_map.records)} accidents in state {state_map.state}, {state_map.year}")
    if viewport is not None:
        print(
            f"longitude {viewport.lon_min:.4f} to {viewport.lon_max:.4f}, "
            f"latitude {viewport.lat_min:.4f} to {viewport.lat_max:.4f}"
        )

    if args.output:
        create_state_map(state_map).write_html(args.output)
        print(f"Saved map to {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "summarize":
        return run_summarize(args)
    return run_map(args)


if __name__ == "__main__":
    sys.exit(main())
