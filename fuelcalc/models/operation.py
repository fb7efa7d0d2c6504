"""Boundary records supplied by the operator-entry workflow."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import TrafficType
from .quantities import specific_density


def _as_str(v: Any) -> str:
    return "" if v is None else str(v).strip()


class FuelOperation(BaseModel):
    """A single recorded refueling event. Read-only for every calculator.

    Field aliases match the back-office JSON (``dateTime``, ``airlineId``,
    ``discount_percentage``, ``usd_exchange_rate``, ``tip_saobracaja``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = ""
    date_time: datetime = Field(alias="dateTime")
    airline_id: str = Field(default="", alias="airlineId")
    airline_name: Optional[str] = None
    destination: str = ""
    quantity_liters: float = 0.0
    quantity_kg: float = 0.0
    price_per_kg: float = 0.0
    discount_percent: float = Field(default=0.0, alias="discount_percentage")
    currency: str = "BAM"
    home_exchange_rate: Optional[float] = Field(default=None, alias="usd_exchange_rate")
    total_amount: Optional[float] = None
    traffic_type: TrafficType = Field(default=TrafficType.EXPORT, alias="tip_saobracaja")

    @model_validator(mode="before")
    @classmethod
    def lift_nested_airline(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        airline = data.get("airline")
        if isinstance(airline, dict):
            data = dict(data)
            if not data.get("airline_name"):
                data["airline_name"] = airline.get("name")
            if "airlineId" not in data and "airline_id" not in data:
                data["airline_id"] = airline.get("id")
        return data

    @field_validator("id", "airline_id", "destination", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("quantity_liters", "quantity_kg", "price_per_kg", mode="before")
    @classmethod
    def missing_quantity_is_zero(cls, v: Any) -> Any:
        return 0.0 if v is None or v == "" else v

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, v: Any) -> str:
        code = _as_str(v).upper()
        return code or "BAM"

    @field_validator("home_exchange_rate", mode="before")
    @classmethod
    def parse_exchange_rate(cls, v: Any) -> Optional[float]:
        if v is None or v == "":
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    @field_validator("traffic_type", mode="before")
    @classmethod
    def parse_traffic_type(cls, v: Any) -> TrafficType:
        return TrafficType.parse(v)

    @field_validator("discount_percent", mode="before")
    @classmethod
    def missing_discount_is_zero(cls, v: Any) -> Any:
        return 0.0 if v is None or v == "" else v

    @field_validator("discount_percent")
    @classmethod
    def clamp_discount(cls, v: float) -> float:
        if math.isnan(v):
            return 0.0
        return max(0.0, min(100.0, v))

    @field_validator("date_time")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def specific_density(self) -> float:
        return specific_density(self.quantity_kg, self.quantity_liters)

    @property
    def group_airline(self) -> str:
        return self.airline_name or self.airline_id


class Airline(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str
    operating_destinations: list[str] = Field(
        default_factory=list, alias="operatingDestinations"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("operating_destinations", mode="before")
    @classmethod
    def sort_destinations(cls, v: Any) -> list[str]:
        return sorted(v or [])
