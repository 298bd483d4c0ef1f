"""Plain-text table rendering of orders."""

from __future__ import annotations

from collections.abc import Sequence

from order_filter.models import Order, format_timestamp

COLUMNS = ("ID", "Weight", "City District Name", "Delivery Date Time")


def _row(order: Order) -> tuple[str, ...]:
    return (
        str(order.id),
        f"{order.weight:g}",
        order.city_district_name,
        format_timestamp(order.delivery_date_time),
    )


def format_orders_table(orders: Sequence[Order]) -> str:
    rows = [COLUMNS, *(_row(o) for o in orders)]
    widths = [max(len(row[i]) for row in rows) for i in range(len(COLUMNS))]

    def _line(cells: Sequence[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    separator = "-+-".join("-" * width for width in widths)
    lines = [_line(rows[0]), separator, *(_line(row) for row in rows[1:])]
    return "\n".join(lines)
