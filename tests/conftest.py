"""Test configuration and fixtures."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

import pytest

FIRST_DELIVERY = datetime(2024, 1, 15, 11, 40, 0)

ZASVIYAZHSKY = "Ульяновск, Засвияжский район"
LENINSKY = "Ульяновск, Ленинский район"

SAMPLE_ORDERS: list[dict[str, object]] = [
    {
        "id": "6f1c1b57-33a4-4c5e-9b7a-2f4f4d1f5a01",
        "weight": 1.5,
        "cityDistrictName": ZASVIYAZHSKY,
        "deliveryDateTime": "2024-01-15 11:50:00",
    },
    {
        "id": "6f1c1b57-33a4-4c5e-9b7a-2f4f4d1f5a02",
        "weight": 3.0,
        "cityDistrictName": ZASVIYAZHSKY,
        "deliveryDateTime": "2024-01-15 12:11:00",
    },
    {
        "id": "6f1c1b57-33a4-4c5e-9b7a-2f4f4d1f5a03",
        "weight": 0.25,
        "cityDistrictName": LENINSKY,
        "deliveryDateTime": "2024-01-15 11:45:00",
    },
    {
        "id": "6f1c1b57-33a4-4c5e-9b7a-2f4f4d1f5a04",
        "weight": 12.0,
        "cityDistrictName": ZASVIYAZHSKY,
        "deliveryDateTime": "2024-01-15 12:09:59",
    },
]


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo `configure_logging` calls made by the CLI under test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def write_orders(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes order records to a JSON file under tmp_path."""

    def _write(records: object = None, name: str = "data.json") -> Path:
        path = tmp_path / name
        payload = SAMPLE_ORDERS if records is None else records
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def data_file(write_orders: Callable[..., Path]) -> Path:
    """Provide the sample order data file."""
    return write_orders()


@pytest.fixture
def workdir(tmp_path: Path, data_file: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside tmp_path with a default `data.json` present."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ORDER_FILTER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("ORDER_FILTER_LOG_FORMAT", raising=False)
    return tmp_path


@pytest.fixture
def sample_records() -> list[dict[str, object]]:
    """Provide the raw records behind `data_file`."""
    return [dict(r) for r in SAMPLE_ORDERS]


@pytest.fixture
def first_delivery() -> datetime:
    return FIRST_DELIVERY
