"""In-process implementations of the history source and preset store."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from fuelcalc.engine.result import ProjectionBatch
from fuelcalc.models.operation import FuelOperation
from fuelcalc.models.projection import ProjectionInputRow

from .base import HistorySource, PresetSnapshot, PresetStore


class InMemoryHistorySource(HistorySource):
    def __init__(self, operations: Iterable[FuelOperation] = ()):
        self._operations = list(operations)

    def add(self, operation: FuelOperation) -> None:
        self._operations.append(operation)

    async def fetch(
        self,
        start: datetime,
        end: datetime,
        airline_id: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> list[FuelOperation]:
        return [
            op
            for op in self._operations
            if start <= op.date_time <= end
            and (not airline_id or op.airline_id == airline_id)
            and (not destination or op.destination == destination)
        ]


class InMemoryPresetStore(PresetStore):
    def __init__(self, rows: Iterable[ProjectionInputRow] = (), cached_results: Optional[ProjectionBatch] = None):
        self._rows = list(rows)
        self._cached_results = cached_results
        self.save_count = 0

    async def load(self) -> PresetSnapshot:
        return PresetSnapshot(rows=list(self._rows), cached_results=self._cached_results)

    async def save(
        self,
        rows: list[ProjectionInputRow],
        cached_results: Optional[ProjectionBatch] = None,
    ) -> None:
        self._rows = list(rows)
        if cached_results is not None:
            self._cached_results = cached_results
        self.save_count += 1
