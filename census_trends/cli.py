"""
Command line entry point for census_trends.

Usage:
    census-trends run                          # configured default sources
    census-trends run EDU01a.csv EDU01b.csv --state SC --bottom -n 3
    census-trends inspect https://.../EDU01a.csv
"""
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .config import settings
from .errors import CensusError
from .pipeline import process_census, process_many
from .viz import plot_county, plot_state

logger = logging.getLogger("census_trends")


def cmd_run(args: argparse.Namespace) -> int:
    locators = args.locators or settings.source.sources
    pair = process_many(
        locators,
        value_name=args.value_field,
        expected_ext=settings.source.expected_ext,
        strict=args.strict,
    )

    out_dir = Path(args.output_dir)
    state_path = out_dir / f"state_{args.value_field}.png"
    county_path = out_dir / f"county_{args.state}_{args.top_or_bottom}_{args.n}.png"

    plot_state(pair.state.frame, value_field=args.value_field, out_path=str(state_path))
    _, _, _, series = plot_county(
        pair.county.frame,
        value_field=args.value_field,
        state_abbrev=args.state,
        top_or_bottom=args.top_or_bottom,
        n=args.n,
        out_path=str(county_path),
    )

    print(f"County rows: {len(pair.county):,}  State rows: {len(pair.state):,}")
    print(f"Areas plotted: {', '.join(series['area_name'].unique())}")
    print(f"Saved: {state_path}")
    print(f"Saved: {county_path}")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    pair = process_census(args.locator, expected_ext=settings.source.expected_ext, strict=args.strict)
    years = sorted({int(y) for y in pair.county.frame["year"]} | {int(y) for y in pair.state.frame["year"]})
    print(f"{args.locator}")
    print(f"  County rows: {len(pair.county):,}")
    print(f"  State rows:  {len(pair.state):,}")
    print(f"  Years:       {years}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    plot_cfg = settings.plot

    parser = argparse.ArgumentParser(
        prog="census-trends",
        description="Reshape Census Bureau CSVs and chart county / division trends",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Process, combine and chart one or more CSVs")
    run.add_argument("locators", nargs="*", help="CSV paths or URLs (default: configured sources)")
    run.add_argument("--value-field", default=plot_cfg.value_field)
    run.add_argument("--state", default=plot_cfg.state_abbrev, type=str.upper)
    which = run.add_mutually_exclusive_group()
    which.add_argument("--top", dest="top_or_bottom", action="store_const", const="top")
    which.add_argument("--bottom", dest="top_or_bottom", action="store_const", const="bottom")
    run.set_defaults(top_or_bottom=plot_cfg.top_or_bottom)
    run.add_argument("-n", type=int, default=plot_cfg.n, help="How many areas to chart")
    run.add_argument("--output-dir", default=plot_cfg.output_dir)
    run.add_argument("--strict", action="store_true",
                     help="Reject county names whose state code is not at the end")
    run.set_defaults(func=cmd_run)

    inspect = sub.add_parser("inspect", help="Show row counts and years for one CSV")
    inspect.add_argument("locator")
    inspect.add_argument("--strict", action="store_true")
    inspect.set_defaults(func=cmd_inspect)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=settings.app.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except CensusError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
