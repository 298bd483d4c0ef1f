"""CLI entrypoint for the delivery order filter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from order_filter import __version__
from order_filter.config import (
    DEFAULT_DELIVERY_LOG,
    DEFAULT_DELIVERY_ORDER,
    DEFAULT_INPUT_FILE,
    RuntimeSettings,
    Settings,
)
from order_filter.logging import configure_logging
from order_filter.pipeline import run_pipeline
from order_filter.repository import DeserializationFailure
from order_filter.resolver import ResolutionError, resolve, source_from_cli
from order_filter.validation import SettingsValidationError, ensure_valid

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = -1
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="order-filter",
        description=(
            "Filter delivery orders by city district and a 30-minute delivery window "
            "starting right after the first delivery time"
        ),
    )
    parser.add_argument("--version", action="version", version=f"order-filter {__version__}")
    parser.add_argument(
        "--config",
        default=None,
        help="A JSON config file that replaces all other options",
    )
    parser.add_argument(
        "-i",
        "--input-file",
        "--input",
        dest="input_file",
        default=str(DEFAULT_INPUT_FILE),
        help=f"The input data file in JSON format (default is '{DEFAULT_INPUT_FILE}')",
    )
    parser.add_argument(
        "-c",
        "--city-district",
        dest="city_district",
        default=None,
        help="A city district substring to filter by (required)",
    )
    parser.add_argument(
        "-d",
        "--first-delivery-date-time",
        dest="first_delivery_date_time",
        default=None,
        help="The first delivery date time as 'YYYY-MM-DD HH:MM:SS' (required)",
    )
    parser.add_argument(
        "-l",
        "--delivery-log",
        dest="delivery_log",
        default=str(DEFAULT_DELIVERY_LOG),
        help=f"A file path to the output log file (default is '{DEFAULT_DELIVERY_LOG}')",
    )
    parser.add_argument(
        "-o",
        "--delivery-order",
        dest="delivery_order",
        default=str(DEFAULT_DELIVERY_ORDER),
        help=f"A file path to the output order file (default is '{DEFAULT_DELIVERY_ORDER}')",
    )
    parser.add_argument(
        "--no-table",
        action="store_true",
        help="Do not print the filtered orders table",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Build CLI-provided settings from parsed arguments."""

    return Settings(
        config_file_path=Path(args.config) if args.config else None,
        input_file_path=Path(args.input_file),
        city_district=args.city_district,
        first_delivery_date_time=args.first_delivery_date_time,
        delivery_log_file_path=Path(args.delivery_log),
        delivery_order_file_path=Path(args.delivery_order),
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        runtime = RuntimeSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_CONFIGURATION

    configure_logging(runtime.log_level, runtime.log_format)

    try:
        settings = resolve(source_from_cli(settings_from_args(args)))
        ensure_valid(settings)
        result = run_pipeline(settings, echo=None if args.no_table else print)

    except SettingsValidationError as e:
        logger.error(str(e), extra={"reason": e.reason.value})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    except (ResolutionError, DeserializationFailure) as e:
        logger.error(str(e), extra={"error": type(e).__name__})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    except OSError as e:
        # Input and output file errors are handled downstream; this is typically the audit log.
        logger.error(str(e), extra={"error": type(e).__name__})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    except Exception:
        logger.exception("Run failed")
        return EXIT_UNEXPECTED

    if not result.written:
        logger.warning(
            "Filtered orders were not written", extra={"path": str(result.output_path)}
        )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
