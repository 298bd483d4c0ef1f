"""JSON-file backed source of delivery orders."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from order_filter.config import DEFAULT_INPUT_FILE
from order_filter.logging import AuditLog
from order_filter.models import ORDER_LIST_ADAPTER, Order

logger = logging.getLogger(__name__)


class DeserializationFailure(Exception):
    """Raised when the input data cannot be read or does not describe a list of orders."""


class OrderRepository:
    """Loads orders from a JSON array on disk."""

    def __init__(self, audit: AuditLog, input_path: Path = DEFAULT_INPUT_FILE) -> None:
        self._audit = audit
        self._path = input_path

    @property
    def path(self) -> Path:
        return self._path

    def get_orders(self) -> list[Order]:
        self._audit.log(f"Loading an input data from the {self._path} file...")

        try:
            data = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DeserializationFailure(
                f"Failed to read an input data from the {self._path} file: {exc}"
            ) from exc

        try:
            orders = ORDER_LIST_ADAPTER.validate_json(data)
        except ValidationError as exc:
            raise DeserializationFailure(
                f"Failed to deserialize an input data from the {self._path} file: {exc}"
            ) from exc

        self._audit.log(
            f"The {len(orders)} orders have been successfully loaded from the {self._path} file."
        )
        logger.debug("Orders loaded", extra={"path": str(self._path), "count": len(orders)})
        return orders
