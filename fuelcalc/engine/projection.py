"""Monthly/quarterly/yearly fuel consumption projections."""

from __future__ import annotations

import locale
import logging
from typing import Iterable, Mapping, Optional, Sequence

from fuelcalc.engine.result import (
    ConsumptionGroup,
    HistoricalAverage,
    ProjectionBatch,
    ProjectionResult,
    TotalProjection,
)
from fuelcalc.errors import IncompleteInputRow
from fuelcalc.models.projection import ProjectionInputRow

logger = logging.getLogger(__name__)

MONTHS_PER_QUARTER = 3
MONTHS_PER_YEAR = 12


def validate_rows(
    rows: Sequence[ProjectionInputRow],
    airline_names: Optional[Mapping[str, str]] = None,
) -> None:
    """Raise IncompleteInputRow for the first row the engine cannot project."""
    if not rows:
        raise IncompleteInputRow("At least one projection row is required")
    for row in rows:
        if not row.airline_id:
            raise IncompleteInputRow(f"Row {row.id}: airline is required", row_id=row.id)
        if not row.destination:
            raise IncompleteInputRow(f"Row {row.id}: destination is required", row_id=row.id)
        if row.monthly_operations_count <= 0:
            raise IncompleteInputRow(
                f"Row {row.id}: monthly operations count must be greater than 0",
                row_id=row.id,
            )
        # Unknown airlines are rejected, not skipped
        if airline_names is not None and row.airline_id not in airline_names:
            raise IncompleteInputRow(
                f"Row {row.id}: unknown airline {row.airline_id!r}", row_id=row.id
            )


def _sort_key(result: ProjectionResult) -> tuple[str, str]:
    return locale.strxfrm(result.airline_name), locale.strxfrm(result.destination)


class ProjectionEngine:
    """Stateless engine that turns averages and planned counts into projections."""

    def project_row(
        self,
        row: ProjectionInputRow,
        airline_name: str,
        history: HistoricalAverage,
    ) -> ProjectionResult:
        monthly = history.average * row.monthly_operations_count
        return ProjectionResult(
            airline_name=airline_name,
            destination=row.destination,
            average_fuel_per_operation=history.average,
            monthly_operations_count=row.monthly_operations_count,
            monthly_consumption=monthly,
            quarterly_consumption=monthly * MONTHS_PER_QUARTER,
            yearly_consumption=monthly * MONTHS_PER_YEAR,
            operations_analyzed=history.sample_size,
        )

    def project(
        self,
        entries: Iterable[tuple[ProjectionInputRow, str, HistoricalAverage]],
    ) -> ProjectionBatch:
        """Project every (row, airline name, average) entry; rows must be validated."""
        results = [self.project_row(row, name, avg) for row, name, avg in entries]
        results.sort(key=_sort_key)
        total = self.total(results)
        logger.info(
            f"Projected {len(results)} rows: {total.monthly:.2f} L/month, "
            f"{total.yearly:.2f} L/year"
        )
        return ProjectionBatch(results=results, total=total)

    @staticmethod
    def total(results: Iterable[ProjectionResult]) -> TotalProjection:
        monthly = quarterly = yearly = 0.0
        for r in results:
            monthly += r.monthly_consumption
            quarterly += r.quarterly_consumption
            yearly += r.yearly_consumption
        return TotalProjection(monthly=monthly, quarterly=quarterly, yearly=yearly)

    @staticmethod
    def by_airline(
        results: Iterable[ProjectionResult],
        selected_airlines: Optional[Iterable[str]] = None,
    ) -> list[ConsumptionGroup]:
        return _regroup(results, lambda r: r.airline_name, selected_airlines)

    @staticmethod
    def by_destination(
        results: Iterable[ProjectionResult],
        selected_airlines: Optional[Iterable[str]] = None,
    ) -> list[ConsumptionGroup]:
        return _regroup(results, lambda r: r.destination, selected_airlines)


def _regroup(results, key_fn, selected_airlines) -> list[ConsumptionGroup]:
    selected = set(selected_airlines or ())
    sums: dict[str, list[float]] = {}
    for r in results:
        if selected and r.airline_name not in selected:
            continue
        acc = sums.setdefault(key_fn(r), [0.0, 0.0, 0.0])
        acc[0] += r.monthly_consumption
        acc[1] += r.quarterly_consumption
        acc[2] += r.yearly_consumption
    return [
        ConsumptionGroup(
            key=key,
            monthly_consumption=m,
            quarterly_consumption=q,
            yearly_consumption=y,
        )
        for key, (m, q, y) in sums.items()
    ]
