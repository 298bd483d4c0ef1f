#!/usr/bin/env python3
"""Programmatic filtering example.

This demonstrates using the filter components directly:

* build settings in code (or load them from a JSON config file)
* validate them
* run the pipeline and inspect the result

Usage:
  python examples/basic_usage.py --district "Засвияжский" --at "2024-01-15 11:40:00"
  python examples/basic_usage.py --config settings.json
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from order_filter.config import RuntimeSettings, Settings
from order_filter.formatting import format_orders_table
from order_filter.logging import configure_logging
from order_filter.pipeline import run_pipeline
from order_filter.resolver import CliProvided, ConfigFile, resolve
from order_filter.validation import Failure, validate_settings


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Filter delivery orders (programmatic example).")
    parser.add_argument("--config", default=None, help="Optional JSON settings file")
    parser.add_argument("--input", default="data.json", help="Order data file")
    parser.add_argument("--district", default="", help="City district substring")
    parser.add_argument("--at", default="", help='First delivery time, "YYYY-MM-DD HH:MM:SS"')
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    configure_logging(RuntimeSettings().log_level)

    if args.config:
        source = ConfigFile(Path(args.config))
    else:
        source = CliProvided(
            Settings(
                input_file_path=Path(args.input),
                city_district=args.district,
                first_delivery_date_time=args.at,
            )
        )

    settings = resolve(source)
    outcome = validate_settings(settings)
    if isinstance(outcome, Failure):
        print(f"Invalid settings ({outcome.reason.value}): {outcome.message}")
        return 1

    result = run_pipeline(settings)

    print(format_orders_table(result.orders))
    print(f"{len(result.orders)} orders matched; written to {result.output_path}: {result.written}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
