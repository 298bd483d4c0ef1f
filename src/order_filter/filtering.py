"""District and delivery-window filter."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from order_filter.logging import AuditLog
from order_filter.models import Order, format_timestamp

DELIVERY_WINDOW = timedelta(minutes=30)


def in_delivery_window(order: Order, first_delivery: datetime) -> bool:
    """True when the order is due strictly inside (first_delivery, first_delivery + 30 min)."""

    return first_delivery < order.delivery_date_time < first_delivery + DELIVERY_WINDOW


def matches_district(order: Order, city_district: str) -> bool:
    return city_district in order.city_district_name


def filter_orders(
    orders: Iterable[Order],
    city_district: str,
    first_delivery: datetime,
    audit: AuditLog | None = None,
) -> list[Order]:
    """Keep orders in the district that are due within the delivery window.

    Input order is preserved.
    """

    if audit is not None:
        audit.log(
            "Filtering the delivery orders "
            f"(params: '{city_district}', '{format_timestamp(first_delivery)}')..."
        )

    filtered = [
        order
        for order in orders
        if in_delivery_window(order, first_delivery) and matches_district(order, city_district)
    ]

    if audit is not None:
        audit.log(
            f"A filtering process has been done. The size of the filtered list is {len(filtered)}."
        )
    return filtered
