#!/usr/bin/env python3
"""Command-line entry point: aggregate heating capacity for equipment codes.

Example::

    lc KM18H5Ox2 K12 KS093 -t 5
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from ingestion import CatalogLoadError
from ingestion.catalog import Catalog
from ingestion.csv_loader import EMBEDDED_CATALOG_PATH, load_catalog, load_embedded_catalog

from .aggregator import aggregate
from .config import (
    CATALOG_ENV_VAR,
    DESIGN_TEMP_ENV_VAR,
    ConfigurationError,
    get_catalog_path,
    get_default_design_temp,
)
from .identifiers import IdentifierParseError, parse_identifiers
from .models import SizingReport
from .report import render_report, write_report_csv
from .totals import build_report


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='lc',
        description="Sum heating capacity for a list of equipment model codes.",
    )
    parser.add_argument(
        'machines', nargs='+',
        help='Equipment tokens, optionally with a quantity (e.g. KM18H5Ox2, K182)'
    )
    parser.add_argument(
        '-t', '--design-temp', type=float, default=None,
        help=f'Design temperature for heating calculation (default: 17, env {DESIGN_TEMP_ENV_VAR})'
    )
    parser.add_argument(
        '--catalog', type=Path, default=None,
        help=f'Alternate equipment CSV (default: embedded table, env {CATALOG_ENV_VAR})'
    )
    parser.add_argument(
        '--output', type=Path, default=None,
        help='Optional CSV file receiving the per-model rows'
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Enable debug logging'
    )
    args = parser.parse_args(argv)
    if args.design_temp is None:
        try:
            args.design_temp = get_default_design_temp()
        except ConfigurationError as exc:
            parser.error(str(exc))
    return args


def resolve_catalog(catalog_path: Optional[Path]) -> Catalog:
    path = catalog_path or get_catalog_path()
    if path == EMBEDDED_CATALOG_PATH:
        return load_embedded_catalog()
    return load_catalog(path)


def run(machines: List[str], design_temp: float, catalog: Catalog) -> SizingReport:
    """Parse tokens, resolve them against ``catalog`` and total the capacities."""
    requested = parse_identifiers(machines)
    aggregated = aggregate(requested, catalog)
    return build_report(aggregated, catalog, design_temp)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.getLogger().setLevel(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        catalog = resolve_catalog(args.catalog)
        report = run(args.machines, args.design_temp, catalog)
    except (CatalogLoadError, IdentifierParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(render_report(report))
    if args.output:
        try:
            write_report_csv(report, args.output)
        except OSError as exc:
            print(f"Error: cannot write {args.output}: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
