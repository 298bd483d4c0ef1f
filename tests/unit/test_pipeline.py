"""Unit tests for the data pipeline."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from unittest.mock import Mock

import pytest

from order_filter.config import Settings
from order_filter.pipeline import run_pipeline
from order_filter.repository import DeserializationFailure


@pytest.fixture
def settings(tmp_path: Path, data_file: Path, first_delivery: datetime) -> Settings:
    return Settings(
        input_file_path=data_file,
        city_district="Засвияжский",
        first_delivery_date_time=first_delivery,
        delivery_log_file_path=tmp_path / "log.txt",
        delivery_order_file_path=tmp_path / "orders.json",
    )


def test_run_pipeline_filters_and_writes(settings: Settings) -> None:
    result = run_pipeline(settings)

    assert result.written is True
    assert [str(o.id)[-2:] for o in result.orders] == ["01", "04"]

    raw = json.loads(settings.delivery_order_file_path.read_text(encoding="utf-8"))
    assert [r["deliveryDateTime"] for r in raw] == ["2024-01-15 11:50:00", "2024-01-15 12:09:59"]


def test_run_pipeline_audit_trail(settings: Settings) -> None:
    run_pipeline(settings)

    text = settings.delivery_log_file_path.read_text(encoding="utf-8")
    lines = text.splitlines()
    assert "Using settings from the command line options." in lines[0]
    assert "Loading an input data" in lines[1]
    assert "successfully loaded" in lines[2]
    assert "Filtering the delivery orders" in lines[3]
    assert "The size of the filtered list is 2." in lines[4]
    assert "Writing result" in lines[5]
    assert "written successfully" in lines[6]


def test_run_pipeline_echoes_table(settings: Settings) -> None:
    echo = Mock()

    run_pipeline(settings, echo=echo)

    echo.assert_called_once()
    table = echo.call_args.args[0]
    assert "City District Name" in table
    assert "Ульяновск, Засвияжский район" in table


def test_run_pipeline_survives_sink_failure(settings: Settings, tmp_path: Path) -> None:
    out_dir = tmp_path / "taken"
    out_dir.mkdir()
    settings = settings.model_copy(update={"delivery_order_file_path": out_dir})

    result = run_pipeline(settings)

    assert result.written is False
    assert len(result.orders) == 2
    assert "Failed to write results" in settings.delivery_log_file_path.read_text(
        encoding="utf-8"
    )


def test_run_pipeline_propagates_input_failures(settings: Settings, tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{}", encoding="utf-8")
    settings = settings.model_copy(update={"input_file_path": bad})

    with pytest.raises(DeserializationFailure):
        run_pipeline(settings)

    assert not settings.delivery_order_file_path.exists()


def test_run_pipeline_rejects_unvalidated_settings(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        run_pipeline(Settings(delivery_log_file_path=tmp_path / "log.txt"))


def test_run_pipeline_notes_config_source(settings: Settings, tmp_path: Path) -> None:
    config = tmp_path / "settings.json"
    settings = settings.model_copy(update={"config_file_path": config, "has_config": True})

    run_pipeline(settings)

    first = settings.delivery_log_file_path.read_text(encoding="utf-8").splitlines()[0]
    assert f"Using settings from the {config} config file." in first
