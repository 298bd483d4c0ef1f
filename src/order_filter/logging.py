"""Logging for the order filter.

Two separate channels:
- diagnostics, via standard library logging with a JSON formatter on stderr
- the audit log, a plain-text file with one timestamped line per pipeline event
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Literal

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}

# Locale-dependent date and time, e.g. "01/15/24 11:40:00".
AUDIT_DATE_FORMAT = "%x %X"
AUDIT_LINE_FORMAT = "%(asctime)s - %(message)s"

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, log_format: Literal["json", "text"] = "json") -> None:
    """Configure root logging for diagnostics.

    Output goes to stderr so that stdout stays reserved for the result table.
    """

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    if log_format == "text":
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    else:
        handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())


class AuditLog:
    """Append-only audit trail of pipeline stage transitions.

    The underlying logger is created directly rather than through
    `logging.getLogger`, so it never joins the global logger tree and nothing
    it does leaks into other handlers.

    Usage::

        with AuditLog(Path("log.txt")) as audit:
            audit.log("Loading orders...")
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._handler: logging.FileHandler | None = None
        self._logger = logging.Logger(f"order_filter.audit[{path}]", level=logging.INFO)
        self._logger.propagate = False

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> AuditLog:
        if self._handler is None:
            handler = logging.FileHandler(self._path, mode="a", encoding="utf-8")
            handler.setFormatter(logging.Formatter(AUDIT_LINE_FORMAT, datefmt=AUDIT_DATE_FORMAT))
            self._logger.addHandler(handler)
            self._handler = handler
        return self

    def close(self) -> None:
        if self._handler is None:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    def log(self, message: str) -> None:
        if self._handler is None:
            raise RuntimeError(f"Audit log is not open: {self._path}")
        self._logger.info(message)
        self._handler.flush()

    def __enter__(self) -> AuditLog:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
