"""httpx clients for the back-office API (fueling operations, projection presets)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from fuelcalc.config.settings import Settings
from fuelcalc.engine.result import ProjectionBatch, ProjectionResult, TotalProjection
from fuelcalc.errors import HistoryUnavailable, PersistenceFailure
from fuelcalc.models.operation import FuelOperation
from fuelcalc.models.projection import ProjectionInputRow

from .base import HistorySource, PresetSnapshot, PresetStore

logger = logging.getLogger(__name__)

OPERATIONS_PATH = "/api/fuel/fueling-operations"
PRESET_PATH = "/api/fuel-projection-presets/default"


def _build_client(settings: Settings) -> httpx.AsyncClient:
    headers = {"Accept": "application/json"}
    if settings.api_token:
        headers["Authorization"] = f"Bearer {settings.api_token}"
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.http_timeout_seconds,
        headers=headers,
    )


class HttpHistorySource(HistorySource):
    """Fetches recorded fueling operations from the back-office API."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or Settings()
        self._client = client or _build_client(self._settings)

    async def fetch(
        self,
        start: datetime,
        end: datetime,
        airline_id: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> list[FuelOperation]:
        params = {"startDate": start.isoformat(), "endDate": end.isoformat()}
        if airline_id:
            params["airlineId"] = airline_id
        if destination:
            params["destination"] = destination

        try:
            resp = await self._client.get(OPERATIONS_PATH, params=params)
            resp.raise_for_status()
            data = resp.json()
            if isinstance(data, dict):
                data = data.get("operations", [])
            if not isinstance(data, list):
                raise ValueError(f"Unexpected operations payload: {type(data).__name__}")
            return [FuelOperation.model_validate(item) for item in data]
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Fetching operations failed ({params}): {e}")
            raise HistoryUnavailable(f"History source failed: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()


class HttpPresetStore(PresetStore):
    """Reads and overwrites the global projection preset."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or Settings()
        self._client = client or _build_client(self._settings)

    async def load(self) -> PresetSnapshot:
        try:
            resp = await self._client.get(PRESET_PATH)
            resp.raise_for_status()
            body = resp.json() or {}
            rows = [
                ProjectionInputRow.model_validate(item)
                for item in body.get("presetData") or []
            ]
            cached = batch_from_wire(body.get("calculatedResultsData"))
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            raise PersistenceFailure(f"Loading projection preset failed: {e}") from e
        return PresetSnapshot(rows=rows, cached_results=cached)

    async def save(
        self,
        rows: list[ProjectionInputRow],
        cached_results: Optional[ProjectionBatch] = None,
    ) -> None:
        body: dict[str, Any] = {"presetData": [row_to_wire(r) for r in rows]}
        if cached_results is not None:
            body["calculatedResultsData"] = batch_to_wire(cached_results)
        try:
            resp = await self._client.put(PRESET_PATH, json=body)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise PersistenceFailure(f"Saving projection preset failed: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()


def row_to_wire(row: ProjectionInputRow) -> dict[str, Any]:
    return {
        "airlineId": row.airline_id,
        "destination": row.destination,
        "operations": row.monthly_operations_count,
    }


def batch_to_wire(batch: ProjectionBatch) -> dict[str, Any]:
    return {
        "projectionResults": [
            {
                "airlineName": r.airline_name,
                "destination": r.destination,
                "averageFuelPerOperation": r.average_fuel_per_operation,
                "operationsPerMonth": r.monthly_operations_count,
                "monthlyConsumption": r.monthly_consumption,
                "quarterlyConsumption": r.quarterly_consumption,
                "yearlyConsumption": r.yearly_consumption,
                "operationsAnalyzed": r.operations_analyzed,
            }
            for r in batch.results
        ],
        "totalProjection": {
            "monthly": batch.total.monthly,
            "quarterly": batch.total.quarterly,
            "yearly": batch.total.yearly,
        },
    }


def batch_from_wire(data: Any) -> Optional[ProjectionBatch]:
    """Parse stored results; None when either part is missing."""
    if not data or not data.get("projectionResults") or not data.get("totalProjection"):
        return None
    results = [
        ProjectionResult(
            airline_name=item.get("airlineName", ""),
            destination=item.get("destination", ""),
            average_fuel_per_operation=float(item.get("averageFuelPerOperation", 0)),
            monthly_operations_count=int(item.get("operationsPerMonth", 0)),
            monthly_consumption=float(item.get("monthlyConsumption", 0)),
            quarterly_consumption=float(item.get("quarterlyConsumption", 0)),
            yearly_consumption=float(item.get("yearlyConsumption", 0)),
            operations_analyzed=int(item.get("operationsAnalyzed", 0)),
        )
        for item in data["projectionResults"]
    ]
    total = data["totalProjection"]
    return ProjectionBatch(
        results=results,
        total=TotalProjection(
            monthly=float(total.get("monthly", 0)),
            quarterly=float(total.get("quarterly", 0)),
            yearly=float(total.get("yearly", 0)),
        ),
    )
