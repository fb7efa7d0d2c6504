from __future__ import annotations

import math
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectionInputRow(BaseModel):
    """One user-edited projection line: airline, destination, monthly count."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=lambda: uuid4().hex)
    airline_id: str = Field(default="", alias="airlineId")
    destination: str = ""
    monthly_operations_count: int = Field(default=0, alias="operations")

    @field_validator("id", "airline_id", "destination", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("monthly_operations_count", mode="before")
    @classmethod
    def clamp_count(cls, v: Any) -> int:
        if v is None or v == "":
            return 0
        count = float(v)
        if not math.isfinite(count) or count < 0:
            return 0
        return int(count)

    @property
    def is_complete(self) -> bool:
        return bool(self.airline_id and self.destination and self.monthly_operations_count > 0)

    def with_changes(self, **changes: Any) -> ProjectionInputRow:
        """Return a re-validated copy with the given fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return ProjectionInputRow.model_validate(data)
