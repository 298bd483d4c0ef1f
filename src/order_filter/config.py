"""Configuration for the order filter.

Two layers:
- :class:`Settings` is the per-run configuration. It comes either from CLI
  flags or, when `--config` is given, entirely from a JSON file.
- :class:`RuntimeSettings` holds process-level options (diagnostics logging)
  loaded from environment variables and a local `.env` file (if present).
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from order_filter.models import parse_timestamp

DEFAULT_INPUT_FILE = Path("data.json")
DEFAULT_DELIVERY_LOG = Path("log.txt")
DEFAULT_DELIVERY_ORDER = Path("orders.json")

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseModel):
    """Run settings for a single filter invocation.

    JSON config files use camelCase keys matching the field names
    (`inputFilePath`, `cityDistrict`, `firstDeliveryDateTime`,
    `deliveryLogFilePath`, `deliveryOrderFilePath`). Snake_case names are
    accepted too.

    Notes:
        `has_config` is derived during resolution and is never read from or
        written to JSON.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    config_file_path: Path | None = Field(
        default=None,
        description="A config file whose contents replace all other options",
    )
    input_file_path: Path = Field(
        default=DEFAULT_INPUT_FILE,
        description="The input order data file in JSON format",
    )
    city_district: str | None = Field(
        default=None,
        description="City district substring to filter by (required)",
    )
    first_delivery_date_time: datetime | None = Field(
        default=None,
        description="Reference timestamp; the delivery window starts right after it (required)",
    )
    delivery_log_file_path: Path = Field(
        default=DEFAULT_DELIVERY_LOG,
        description="Audit log output file",
    )
    delivery_order_file_path: Path = Field(
        default=DEFAULT_DELIVERY_ORDER,
        description="Filtered orders output file",
    )

    has_config: bool = Field(default=False, exclude=True)

    @field_validator("first_delivery_date_time", mode="before")
    @classmethod
    def _parse_first_delivery_date_time(cls, value: object) -> object:
        # Anything but fixed-format text or a naive datetime is treated as
        # "not provided"; the validator reports it.
        if isinstance(value, str):
            try:
                return parse_timestamp(value)
            except ValueError:
                return None
        if isinstance(value, datetime) and value.tzinfo is None:
            return value
        return None


class RuntimeSettings(BaseSettings):
    """Process-level settings.

    Environment variables:
    - ORDER_FILTER_LOG_LEVEL   (optional, default WARNING)
    - ORDER_FILTER_LOG_FORMAT  (optional, `json` or `text`)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `RuntimeSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="WARNING",
        description="Root logging level for diagnostics",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Diagnostics log format",
    )

    model_config = SettingsConfigDict(
        env_prefix="ORDER_FILTER_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return level
