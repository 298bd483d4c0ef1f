"""Order entity and the fixed on-disk timestamp format.

Timestamps are written as `YYYY-MM-DD HH:MM:SS` with no `T` separator and no
offset suffix. They are parsed into naive datetimes.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator
from pydantic.alias_generators import to_camel

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_timestamp(value: str) -> datetime:
    """Parse a timestamp in the fixed format.

    Raises:
        ValueError: if the text does not match `YYYY-MM-DD HH:MM:SS`.
    """

    return datetime.strptime(value.strip(), TIMESTAMP_FORMAT)


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


class Order(BaseModel):
    """A single delivery order as stored in the input data file."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID
    weight: float = Field(ge=0.0)
    city_district_name: str = Field(min_length=1)
    delivery_date_time: datetime

    @field_validator("delivery_date_time", mode="before")
    @classmethod
    def _parse_delivery_date_time(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_timestamp(value)
        if isinstance(value, datetime) and value.tzinfo is None:
            return value
        raise ValueError(f"expected a 'YYYY-MM-DD HH:MM:SS' timestamp, got {value!r}")

    @field_serializer("delivery_date_time")
    def _serialize_delivery_date_time(self, value: datetime) -> str:
        return format_timestamp(value)


ORDER_LIST_ADAPTER: TypeAdapter[list[Order]] = TypeAdapter(list[Order])
