"""PresetSync -- load-gated, debounced persistence of projection input rows.

Lifecycle: UNINITIALIZED -> LOADING -> READY.

While the saved preset is loading, local edits (such as the placeholder row
added for an empty preset) are kept but never written back. Once READY, each edit
restarts a single trailing-edge timer and only the final snapshot after a
quiet period is saved.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from fuelcalc.config.settings import Settings
from fuelcalc.engine.result import ProjectionBatch
from fuelcalc.errors import PersistenceFailure, SyncStateError
from fuelcalc.models.enums import SyncState
from fuelcalc.models.projection import ProjectionInputRow
from fuelcalc.providers.base import PresetSnapshot, PresetStore

logger = logging.getLogger(__name__)


class PresetSync:
    """Mirrors the editable projection rows to a PresetStore.

    Edit methods are synchronous but, once READY, must be called from a
    running event loop since they arm an ``asyncio`` timer.
    """

    def __init__(
        self,
        store: PresetStore,
        settings: Optional[Settings] = None,
        debounce_seconds: Optional[float] = None,
    ) -> None:
        settings = settings or Settings()
        self._store = store
        self.debounce_seconds = (
            debounce_seconds if debounce_seconds is not None else settings.autosave_debounce_seconds
        )
        self.state = SyncState.UNINITIALIZED
        self.cached_results: Optional[ProjectionBatch] = None
        self._rows: list[ProjectionInputRow] = []
        self._timer: Optional[asyncio.TimerHandle] = None
        self._saves: set[asyncio.Task[None]] = set()

    @property
    def rows(self) -> list[ProjectionInputRow]:
        return list(self._rows)

    @property
    def pending_save(self) -> bool:
        return self._timer is not None

    def savable_rows(self) -> list[ProjectionInputRow]:
        """Rows worth persisting: airline, destination and a positive count."""
        return [r for r in self._rows if r.is_complete]

    # -- loading -----------------------------------------------------------

    async def load(self) -> PresetSnapshot:
        """Fetch saved rows; the sync becomes READY whether or not this succeeds."""
        self.state = SyncState.LOADING
        self._cancel_timer()
        try:
            snapshot = await self._store.load()
        except Exception as e:
            logger.exception("Loading projection preset failed")
            self._ensure_placeholder()
            if isinstance(e, PersistenceFailure):
                raise
            raise PersistenceFailure(f"Loading projection preset failed: {e}") from e
        else:
            if snapshot.rows:
                self._rows = list(snapshot.rows)
                self.cached_results = snapshot.cached_results
                logger.info(f"Loaded {len(snapshot.rows)} projection rows")
            else:
                self._ensure_placeholder()
            return snapshot
        finally:
            self.state = SyncState.READY

    def _ensure_placeholder(self) -> None:
        if not self._rows:
            self.add_row()

    # -- edits -------------------------------------------------------------

    def add_row(self, **fields: Any) -> ProjectionInputRow:
        self._require_started()
        row = ProjectionInputRow.model_validate(fields)
        self._rows.append(row)
        self._changed()
        return row

    def update_row(self, row_id: str, **changes: Any) -> ProjectionInputRow:
        self._require_started()
        index = self._index_of(row_id)
        current = self._rows[index]
        # A new airline invalidates the chosen destination
        if "airline_id" in changes and "destination" not in changes:
            if str(changes["airline_id"]) != current.airline_id:
                changes["destination"] = ""
        updated = current.with_changes(**changes)
        self._rows[index] = updated
        self._changed()
        return updated

    def remove_row(self, row_id: str) -> None:
        self._require_started()
        del self._rows[self._index_of(row_id)]
        self._changed()

    def replace_rows(self, rows: list[ProjectionInputRow]) -> None:
        self._require_started()
        self._rows = list(rows)
        self._changed()

    def _index_of(self, row_id: str) -> int:
        for i, row in enumerate(self._rows):
            if row.id == row_id:
                return i
        raise KeyError(f"No projection row with id {row_id!r}")

    def _require_started(self) -> None:
        if self.state == SyncState.UNINITIALIZED:
            raise SyncStateError("Projection rows cannot be edited before load() is called")

    def _changed(self) -> None:
        if self.state == SyncState.READY:
            self._schedule_save()

    # -- saving ------------------------------------------------------------

    def _schedule_save(self) -> None:
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._timer = loop.call_later(self.debounce_seconds, self._fire)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        rows = self.savable_rows()
        task = asyncio.get_running_loop().create_task(self._autosave(rows))
        self._saves.add(task)
        task.add_done_callback(self._saves.discard)

    async def _autosave(self, rows: list[ProjectionInputRow]) -> None:
        try:
            await self._store.save(rows)
        except Exception as e:
            # Next edit schedules another full snapshot
            logger.warning(f"Auto-save of projection preset dropped: {e}")
        else:
            logger.info(f"Auto-saved {len(rows)} projection rows")

    async def save_now(self, batch: Optional[ProjectionBatch] = None) -> None:
        """Explicit save (rows plus results); failures are raised to the caller."""
        if self.state != SyncState.READY:
            raise SyncStateError(f"Cannot save while {self.state.value}")
        self._cancel_timer()
        rows = self.savable_rows()
        try:
            await self._store.save(rows, batch)
        except Exception as e:
            logger.exception("Saving projection preset failed")
            if isinstance(e, PersistenceFailure):
                raise
            raise PersistenceFailure(f"Saving projection preset failed: {e}") from e
        if batch is not None:
            self.cached_results = batch
        logger.info(f"Saved {len(rows)} projection rows with results")

    async def drain(self) -> None:
        """Wait for auto-saves that have already started."""
        if self._saves:
            await asyncio.gather(*list(self._saves))

    def close(self) -> None:
        self._cancel_timer()
