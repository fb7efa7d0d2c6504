"""Projection service -- coordinates history fetches, averaging and saving."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from fuelcalc.config.settings import Settings
from fuelcalc.engine.history import HistoricalAverager
from fuelcalc.engine.projection import ProjectionEngine, validate_rows
from fuelcalc.engine.result import HistoricalAverage, ProjectionBatch
from fuelcalc.errors import HistoryUnavailable, PersistenceFailure
from fuelcalc.models.operation import Airline
from fuelcalc.models.projection import ProjectionInputRow
from fuelcalc.providers.base import HistorySource
from fuelcalc.sync.preset_sync import PresetSync

logger = logging.getLogger(__name__)


class ProjectionService:
    """Runs a projection for a set of input rows.

    Flow:
    - Validate rows against the airline directory.
    - Fetch each row's recent history from the history source.
    - Average, project, sort and total.
    - Optionally persist rows and results through PresetSync.
    """

    def __init__(
        self,
        history_source: HistorySource,
        airlines: Iterable[Airline],
        preset_sync: Optional[PresetSync] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or Settings()
        self._history = history_source
        self._airline_names = {a.id: a.name for a in airlines}
        self._sync = preset_sync
        self._averager = HistoricalAverager(settings=self._settings)
        self._engine = ProjectionEngine()

    async def calculate(
        self,
        rows: Optional[Sequence[ProjectionInputRow]] = None,
        now: Optional[datetime] = None,
    ) -> ProjectionBatch:
        """Project the given rows (or the synced rows when omitted)."""
        if rows is None:
            rows = self._sync.rows if self._sync is not None else []
        validate_rows(rows, self._airline_names)

        start, end = self._averager.window(now)
        averages = await asyncio.gather(
            *(self._average_for(row, start, end) for row in rows)
        )
        entries = [
            (row, self._airline_names[row.airline_id], avg)
            for row, avg in zip(rows, averages)
        ]
        return self._engine.project(entries)

    async def calculate_and_save(
        self,
        rows: Optional[Sequence[ProjectionInputRow]] = None,
        now: Optional[datetime] = None,
    ) -> ProjectionBatch:
        """Calculate, then store rows and results; a failed save is raised."""
        batch = await self.calculate(rows, now=now)
        if self._sync is None:
            return batch
        try:
            await self._sync.save_now(batch)
        except PersistenceFailure as e:
            raise PersistenceFailure(str(e), batch=batch) from e
        return batch

    async def _average_for(
        self, row: ProjectionInputRow, start: datetime, end: datetime
    ) -> HistoricalAverage:
        try:
            history = await self._history.fetch(
                start, end, airline_id=row.airline_id, destination=row.destination
            )
        except HistoryUnavailable:
            raise
        except Exception as e:
            raise HistoryUnavailable(
                f"History for {row.airline_id}/{row.destination} unavailable: {e}"
            ) from e
        return self._averager.average(history, row.airline_id, row.destination, now=end)
