"""Command-line interface for POS slot reports.

Usage:
    pos-slots report data.json --store Clinton --from 2024-01-01 --to 2024-01-28
    pos-slots grid data.xlsx --day Monday
    pos-slots chart data.json --by day --json
    pos-slots convert sales_week_1.csv sales_week_2.csv -o data.json
    pos-slots sample -o sample_sales_data.xlsx --seed 7

Exit codes:
    0 on success (including "no data")
    1 on load or configuration errors
    2 on argument errors
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from pos_slots.closed_hours import load_closed_hours
from pos_slots.config import SlotsConfig
from pos_slots.exceptions import SlotsError
from pos_slots.formatters import format_processing_stats, format_series, format_view
from pos_slots.loaders import combine_sources, load_records, write_records_json
from pos_slots.pipeline import ViewFilters, build_view, process_records
from pos_slots.sample_data import generate_sample_data, write_sample_excel

logger = logging.getLogger(__name__)


def _add_view_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("source", help="Data file (.json, .xlsx, .xls, .csv) or http(s) URL.")
    p.add_argument("--store", default="", help="StoreName to show (default: all stores).")
    p.add_argument("--day", default="", help="Day to show, e.g. Monday (default: all days).")
    p.add_argument("--from", dest="date_from", default="", help="First date, inclusive (YYYY-MM-DD).")
    p.add_argument("--to", dest="date_to", default="", help="Last date, inclusive (YYYY-MM-DD).")
    p.add_argument(
        "--sort",
        choices=["lowest", "highest"],
        default="lowest",
        help="Show lowest or highest averages first (default: lowest).",
    )
    p.add_argument(
        "--by",
        dest="bucket_by",
        choices=["hour", "day"],
        default="hour",
        help="Chart buckets (default: hour).",
    )
    p.add_argument("--page", type=int, default=1, help="Table page, 1-based (default: 1).")
    p.add_argument("--page-size", type=int, default=None, help="Rows per page (default: 20).")
    p.add_argument(
        "--closed-hours",
        default=None,
        help="JSON file of store name -> closed hours (default: built-in table).",
    )
    p.add_argument("--json", action="store_true", help="Print the result as JSON.")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pos-slots",
        description="Find the weakest and strongest store/day/hour sales slots.",
    )
    p.add_argument(
        "--verbose",
        "--debug",
        action="store_true",
        dest="verbose",
        help="Verbose/debug logging output.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("report", "Stats, chart and table of slots."),
        ("grid", "Day x hour grid of averages."),
        ("chart", "Chart series only."),
    ):
        _add_view_args(sub.add_parser(name, help=help_text))

    conv = sub.add_parser("convert", help="Combine CSV/Excel exports into one JSON array.")
    conv.add_argument("inputs", nargs="+", help="Input files, e.g. one export per week.")
    conv.add_argument("-o", "--output", default="data.json", help="Output JSON path (default: data.json).")

    sample = sub.add_parser("sample", help="Write generated sample data.")
    sample.add_argument("-o", "--output", default="sample_sales_data.xlsx", help="Output .xlsx or .json path.")
    sample.add_argument("--weeks", type=int, default=4, help="Weeks of data (default: 4).")
    sample.add_argument("--seed", type=int, default=None, help="Random seed.")
    return p


def _config_from_args(args: argparse.Namespace) -> SlotsConfig:
    config = SlotsConfig.from_env()
    if args.closed_hours:
        config = replace(config, closed_hours=load_closed_hours(Path(args.closed_hours)))
    if args.page_size is not None:
        config = replace(config, page_size=args.page_size)
    return config


def _run_view(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    raw = load_records(args.source)
    result = process_records(raw, config, args.date_from, args.date_to)
    filters = ViewFilters(
        store=args.store,
        day=args.day,
        sort=args.sort,
        bucket_by=args.bucket_by,
        page=args.page,
    )
    view = build_view(result.processed, filters, config)

    if args.json:
        payload = view.to_dict()
        payload["processing"] = result.stats.to_dict()
        if args.command == "grid":
            payload = {"grid": payload["grid"], "processing": payload["processing"]}
        elif args.command == "chart":
            payload = {"series": payload["series"], "processing": payload["processing"]}
        print(json.dumps(payload, indent=2))
        return 0

    print(format_processing_stats(result.stats))
    print()
    if args.command == "grid":
        print(format_view(view, sections=("grid",)))
    elif args.command == "chart":
        title = "Average Sales by Hour" if args.bucket_by == "hour" else "Average Sales by Day"
        title += f" - {args.store}" if args.store else " - All Stores"
        print(format_series(view.series, title) if not view.is_empty else format_view(view))
    else:
        print(format_view(view))
    return 0


def _run_convert(args: argparse.Namespace) -> int:
    rows = combine_sources(args.inputs)
    out = write_records_json(rows, args.output)
    print(f"Wrote: {out} ({len(rows):,} rows)")
    return 0


def _run_sample(args: argparse.Namespace) -> int:
    out = Path(args.output)
    if out.suffix.lower() == ".json":
        write_records_json(generate_sample_data(args.weeks, args.seed), out)
    else:
        write_sample_excel(out, args.weeks, args.seed)
    print(f"Wrote: {out}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    try:
        if args.command == "convert":
            return _run_convert(args)
        if args.command == "sample":
            return _run_sample(args)
        return _run_view(args)
    except SlotsError as e:
        logger.error("%s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
