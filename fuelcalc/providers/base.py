from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fuelcalc.engine.result import ProjectionBatch
from fuelcalc.models.operation import FuelOperation
from fuelcalc.models.projection import ProjectionInputRow


@dataclass(frozen=True)
class PresetSnapshot:
    """What the preset store holds: input rows and, optionally, last results."""

    rows: list[ProjectionInputRow]
    cached_results: Optional[ProjectionBatch] = None


class HistorySource(ABC):
    """Abstract base for sources of recorded fuel operations."""

    @abstractmethod
    async def fetch(
        self,
        start: datetime,
        end: datetime,
        airline_id: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> list[FuelOperation]:
        """Return operations in [start, end], optionally filtered."""
        ...


class PresetStore(ABC):
    """Abstract base for persisting projection input rows."""

    @abstractmethod
    async def load(self) -> PresetSnapshot:
        ...

    @abstractmethod
    async def save(
        self,
        rows: list[ProjectionInputRow],
        cached_results: Optional[ProjectionBatch] = None,
    ) -> None:
        """Overwrite stored rows; cached_results=None leaves stored results as-is."""
        ...
