"""Tests for ProjectionService -- fetch, average, project, save."""

from unittest.mock import AsyncMock

import httpx
import pytest

from fuelcalc.errors import HistoryUnavailable, IncompleteInputRow, PersistenceFailure
from fuelcalc.orchestrator.projection_service import ProjectionService
from fuelcalc.providers.base import HistorySource, PresetSnapshot, PresetStore
from fuelcalc.providers.memory import InMemoryHistorySource, InMemoryPresetStore
from fuelcalc.sync.preset_sync import PresetSync
from tests.conftest import NOW, make_op


@pytest.fixture
def history():
    return InMemoryHistorySource(
        [
            make_op(1000, days_ago=1, airline_id="1", destination="FRA"),
            make_op(1200, days_ago=2, airline_id="1", destination="FRA"),
            make_op(3000, days_ago=3, airline_id="2", destination="VIE"),
            make_op(9999, days_ago=400, airline_id="2", destination="VIE"),
        ]
    )


class TestCalculate:
    @pytest.mark.asyncio
    async def test_projects_each_row(self, history, airlines, rows):
        service = ProjectionService(history, airlines)
        batch = await service.calculate(rows, now=NOW)

        assert [r.airline_name for r in batch.results] == ["Austrian", "Wizz Air"]
        austrian, wizz = batch.results
        assert austrian.average_fuel_per_operation == pytest.approx(3000)
        assert austrian.operations_analyzed == 1
        assert austrian.monthly_consumption == pytest.approx(12000)
        assert wizz.average_fuel_per_operation == pytest.approx(1100)
        assert wizz.yearly_consumption == pytest.approx(1100 * 2 * 12)
        assert batch.total.monthly == pytest.approx(12000 + 2200)

    @pytest.mark.asyncio
    async def test_no_history_gives_zero_row(self, airlines, rows):
        service = ProjectionService(InMemoryHistorySource(), airlines)
        batch = await service.calculate(rows, now=NOW)
        assert all(r.operations_analyzed == 0 for r in batch.results)
        assert batch.total.yearly == 0

    @pytest.mark.asyncio
    async def test_source_failure_is_not_zero(self, airlines, rows):
        source = AsyncMock(spec=HistorySource)
        source.fetch.side_effect = httpx.ConnectError("unreachable")
        service = ProjectionService(source, airlines)
        with pytest.raises(HistoryUnavailable):
            await service.calculate(rows, now=NOW)

    @pytest.mark.asyncio
    async def test_invalid_rows_rejected_before_fetch(self, airlines):
        source = AsyncMock(spec=HistorySource)
        service = ProjectionService(source, airlines)
        with pytest.raises(IncompleteInputRow):
            await service.calculate([], now=NOW)
        source.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetch_uses_lookback_window(self, airlines, rows):
        source = AsyncMock(spec=HistorySource)
        source.fetch.return_value = []
        service = ProjectionService(source, airlines)
        await service.calculate(rows, now=NOW)
        start, end = source.fetch.call_args.args
        assert end == NOW
        assert (start.year, start.month, start.day) == (2024, 3, 15)


class TestCalculateAndSave:
    @pytest.mark.asyncio
    async def test_uses_synced_rows_and_saves(self, history, airlines, rows, settings):
        store = InMemoryPresetStore(rows)
        sync = PresetSync(store, settings=settings)
        await sync.load()
        service = ProjectionService(history, airlines, preset_sync=sync, settings=settings)

        batch = await service.calculate_and_save(now=NOW)

        assert len(batch.results) == 2
        snapshot = await store.load()
        assert snapshot.cached_results == batch
        assert sync.cached_results == batch

    @pytest.mark.asyncio
    async def test_save_failure_carries_batch(self, history, airlines, rows, settings):
        store = AsyncMock(spec=PresetStore)
        store.load.return_value = PresetSnapshot(rows=rows)
        store.save.side_effect = PersistenceFailure("500")
        sync = PresetSync(store, settings=settings)
        await sync.load()
        service = ProjectionService(history, airlines, preset_sync=sync, settings=settings)

        with pytest.raises(PersistenceFailure) as exc:
            await service.calculate_and_save(now=NOW)
        assert exc.value.batch is not None
        assert len(exc.value.batch.results) == 2

    @pytest.mark.asyncio
    async def test_without_sync_just_calculates(self, history, airlines, rows):
        service = ProjectionService(history, airlines)
        batch = await service.calculate_and_save(rows, now=NOW)
        assert len(batch.results) == 2
