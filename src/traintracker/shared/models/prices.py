# traintracker/shared/models/prices.py

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from traintracker.common.utils.date_utils import to_iso_z


@dataclass(frozen=True, slots=True)
class Sample:
    """One observed price. Immutable once created."""

    timestamp: datetime
    price: float


class PricePoint(BaseModel):
    """History entry as exposed over HTTP: ``{time, price}``."""

    model_config = ConfigDict(frozen=True)

    time: datetime
    price: float

    @field_serializer("time")
    def serialize_time(self, value: datetime) -> str:
        return to_iso_z(value)

    @classmethod
    def from_sample(cls, sample: Sample) -> "PricePoint":
        return cls(time=sample.timestamp, price=sample.price)


class Summary(BaseModel):
    """
    Derived statistics for one series snapshot.

    Rebuilt on every read and never stored. ``previous`` is available to
    callers but left out of the serialized payload; ``open`` is only
    serialized when set.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    history: list[PricePoint] = Field(default_factory=list)
    current: float
    previous: float = Field(exclude=True)
    change: float
    change_percent: float = Field(alias="changePercent")
    high: float
    low: float
    open_price: float | None = Field(default=None, alias="open")

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the public field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
