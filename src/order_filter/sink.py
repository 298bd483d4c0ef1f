"""Best-effort writer for filtered orders.

A failed write is recorded in the audit log and reported to the caller, but
never raised: losing the output does not fail the run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from order_filter.logging import AuditLog
from order_filter.models import ORDER_LIST_ADAPTER, Order

logger = logging.getLogger(__name__)


def save_results(orders: Sequence[Order], output_path: Path, audit: AuditLog) -> bool:
    """Write `orders` to `output_path` as a JSON array.

    The file is created if absent and truncated if present.

    Returns:
        True if the file was written, False if the write failed.
    """

    try:
        payload = ORDER_LIST_ADAPTER.dump_json(list(orders), by_alias=True)
        with open(output_path, "wb") as f:
            audit.log(f"Writing result to the {output_path} file...")
            f.write(payload)
            f.flush()
    except (OSError, ValueError) as e:
        audit.log(
            f"Failed to write results to the {output_path} file. Exception message: {e}"
        )
        logger.warning(
            "Failed to write results", extra={"path": str(output_path), "error": str(e)}
        )
        return False

    audit.log("The filtered results have been written successfully.")
    return True
