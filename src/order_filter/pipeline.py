"""The filter pipeline: load, filter, present and save orders."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from order_filter.config import Settings
from order_filter.filtering import filter_orders
from order_filter.formatting import format_orders_table
from order_filter.logging import AuditLog
from order_filter.models import Order
from order_filter.repository import OrderRepository
from order_filter.sink import save_results

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of a pipeline run."""

    orders: list[Order]
    output_path: Path
    written: bool


def run_pipeline(
    settings: Settings, *, echo: Callable[[str], None] | None = None
) -> PipelineResult:
    """Run the data stages for resolved and validated settings.

    Args:
        settings: Settings that already passed validation.
        echo: Optional callback receiving the rendered result table.

    Returns:
        The filtered orders and whether they were written to disk.

    Raises:
        DeserializationFailure: if the input data cannot be loaded.
    """

    if not settings.city_district or settings.first_delivery_date_time is None:
        raise ValueError("run_pipeline requires validated settings")

    with AuditLog(settings.delivery_log_file_path) as audit:
        if settings.has_config:
            audit.log(f"Using settings from the {settings.config_file_path} config file.")
        else:
            audit.log("Using settings from the command line options.")

        repository = OrderRepository(audit, settings.input_file_path)
        orders = repository.get_orders()

        results = filter_orders(
            orders, settings.city_district, settings.first_delivery_date_time, audit
        )
        if echo is not None:
            echo(format_orders_table(results))

        written = save_results(results, settings.delivery_order_file_path, audit)

    logger.info(
        "Run completed",
        extra={
            "loaded": len(orders),
            "filtered": len(results),
            "output": str(settings.delivery_order_file_path),
            "written": written,
        },
    )
    return PipelineResult(
        orders=results, output_path=settings.delivery_order_file_path, written=written
    )
