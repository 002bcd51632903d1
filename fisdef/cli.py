#!/usr/bin/env python
"""
FISPACT-II Decay Source Tool

Convert FISPACT-II time steps to decay sources.

Usage:
    fisdef file.json --rad gamma --mcnp        Typical use
    fisdef file.json                           Summary of time steps only

    fisdef file.json 1                         => [1]
    fisdef file.json 0-2                       => [0, 1, 2]
    fisdef file.json "1 3 4"                   => [1, 3, 4]
    fisdef file.json all                       => every time step

    fisdef file.json 2 --mcnp --text --json
        creates 'step_2.i', 'step_2.txt', 'step_2.json'

Notes:
    FISPACT-II state notation (m, n, o... => m1, m2, m3...) should line up
    with the IAEA data, but this is not guaranteed.

    Pre-fetched IAEA data are read from FISDEF_DATA_DIR. '--fetch' queries
    the IAEA LiveChart API directly instead.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config as settings
from .config import OutputFormat, RunConfig
from .errors import FileCreateFailure, InventoryError, MalformedSpec, NoDecayData, OutOfRange
from .fispact.inventory import Inventory, read_json
from .intervals import parse_index_spec, select_intervals
from .logs import init_logging
from .nuclear.iaea import IaeaProvider
from .nuclear.records import RadType
from .output import output_path, write_json, write_mcnp, write_table
from .source import SortProperty, build_sources

logger = logging.getLogger(__name__)


# ==============================================================================
# Argument parsing
# ==============================================================================

def _index_arg(text: str):
    try:
        return parse_index_spec(text)
    except MalformedSpec as e:
        raise argparse.ArgumentTypeError(str(e))


def _sort_arg(text: str) -> SortProperty:
    try:
        return SortProperty.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fisdef",
        description="Convert FISPACT-II steps to decay sources",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "path",
        type=str,
        help="Path to FISPACT-II JSON file"
    )
    parser.add_argument(
        "idx",
        nargs="?",
        type=_index_arg,
        default="all",
        help="Indices of time steps: 1, \"1 5 12\", 1-3 or 'all' (default: all)"
    )

    data = parser.add_argument_group("Data options")
    data.add_argument(
        "--rad", "-r",
        type=RadType,
        default=RadType.GAMMA,
        choices=list(RadType),
        metavar="type",
        help="Type of decay radiation: alpha, beta-plus, beta-minus, gamma, xray, electron (default: gamma)"
    )
    data.add_argument(
        "--sort", "-s",
        type=_sort_arg,
        default=SortProperty.ENERGY,
        metavar="property",
        help="Sort records by ascending 'energy' or descending 'intensity' (default: energy)"
    )
    data.add_argument(
        "--fetch",
        action="store_true",
        help="Query IAEA directly rather than pre-fetched data"
    )

    files = parser.add_argument_group("Output files")
    files.add_argument(
        "--output", "-o",
        type=str,
        default="step",
        metavar="name",
        help="Prefix for output files, named <name>_<n>.<ext> (default: step)"
    )
    files.add_argument(
        "--text", "-t",
        action="store_true",
        help="Text based table"
    )
    files.add_argument(
        "--json", "-j",
        action="store_true",
        help="JSON output format"
    )
    files.add_argument(
        "--mcnp", "-m",
        action="store_true",
        help="MCNP source distribution cards"
    )
    files.add_argument(
        "--id", "-i",
        type=int,
        default=settings.DEFAULT_START_ID,
        metavar="num",
        help=f"Starting MCNP distribution number (default: {settings.DEFAULT_START_ID})"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Verbose logging (-v, -vv)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress all logging, overrules --verbose"
    )

    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    formats = set()
    if args.json:
        formats.add(OutputFormat.JSON)
    if args.text:
        formats.add(OutputFormat.TEXT)
    if args.mcnp:
        formats.add(OutputFormat.MCNP)

    return RunConfig(
        path=Path(args.path),
        index=args.idx,
        rad=args.rad,
        sort=args.sort,
        fetch=args.fetch,
        output=args.output,
        formats=formats,
        start_id=args.id,
        verbose=args.verbose,
        quiet=args.quiet,
    )


# ==============================================================================
# Processing
# ==============================================================================

def print_summary(inventory: Inventory) -> None:
    """Table of interval times and totals."""
    print()
    print("-" * 71)
    print("           Interval Time [s]                  Interval totals")
    print("Index   Irrad     Cool    Total      Mass [g]  Dose [uSv/hr]   Act [Bq]")
    print("-" * 71)

    for i, interval in enumerate(inventory.intervals):
        print(
            f" {i:<3}   {interval.irradiation_time:.2e} {interval.cooling_time:.2e} "
            f"{interval.total_time:.2e}    {interval.mass:.2e}     "
            f"{interval.dose_rate * 1e6:.2e}     {interval.activity:.2e}"
        )
    print()


def process_interval(inventory: Inventory, index: int, config: RunConfig, provider) -> bool:
    """
    Build the sources of one interval and write every requested format.

    Returns:
        False if any requested output could not be written
    """
    logger.info(f"Generating sources from interval {index}")
    nuclides = inventory.intervals[index].unstable_nuclides()

    try:
        sources = build_sources(nuclides, provider, config.rad, config.sort, config.fetch)
    except NoDecayData as e:
        logger.info(f"No relevant decay data found ({e})")
        return True

    path = output_path(config.output, index)
    ok = True

    writers = [
        (OutputFormat.JSON, "JSON", lambda: write_json(sources, path, index)),
        (OutputFormat.MCNP, "MCNP", lambda: write_mcnp(sources, path, index, config.start_id)),
        (OutputFormat.TEXT, "text file", lambda: write_table(sources, path)),
    ]
    for fmt, label, write in writers:
        if not config.wants(fmt):
            continue
        logger.info(f"Writing to {label}")
        try:
            write()
        except FileCreateFailure as e:
            logger.error(str(e))
            ok = False

    return ok


def run(config: RunConfig, provider) -> int:
    """Run the whole conversion, returning the exit status."""
    logger.info("Reading FISPACT-II JSON data")
    logger.debug(f"{config.path}")
    try:
        inventory = read_json(config.path)
    except InventoryError as e:
        logger.error(str(e))
        return 1

    logger.info("Table of FISPACT-II intervals")
    print_summary(inventory)

    if not config.formats:
        logger.debug("No outputs requested")
        return 0

    logger.info("Parsing user input to explicit interval indices")
    try:
        indices = select_intervals(config.index, len(inventory))
    except OutOfRange as e:
        logger.error(str(e))
        return 1

    status = 0
    for index in indices:
        if not process_interval(inventory, index, config, provider):
            status = 1
    return status


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = config_from_args(args)
    init_logging(config.verbose, config.quiet)

    provider = IaeaProvider(
        settings.DATA_DIR,
        base_url=settings.IAEA_URL,
        timeout=settings.IAEA_TIMEOUT,
        save_fetched=settings.SAVE_FETCHED,
    )
    return run(config, provider)


if __name__ == "__main__":
    sys.exit(main())
