"""Recent-history sampling for per-operation fuel averages."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from fuelcalc.config.settings import Settings
from fuelcalc.engine.result import HistoricalAverage
from fuelcalc.models.operation import FuelOperation


class HistoricalAverager:
    """Averages liters per operation over the most recent matching records.

    Only operations for the requested airline and destination that fall
    inside the lookback window are considered. When more than ``sample_cap``
    match, the newest ones are kept.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        lookback_months: Optional[int] = None,
        sample_cap: Optional[int] = None,
    ):
        settings = settings or Settings()
        self.lookback_months = (
            lookback_months if lookback_months is not None else settings.lookback_months
        )
        self.sample_cap = sample_cap if sample_cap is not None else settings.sample_cap
        if self.sample_cap < 0:
            raise ValueError(f"sample_cap cannot be negative, got {self.sample_cap}")

    def window(self, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
        """Return (start, end); start is midnight of the day N months back."""
        end = now or datetime.now(tz=timezone.utc)
        if end.tzinfo is None:
            end = end.replace(tzinfo=timezone.utc)
        start = (end - relativedelta(months=self.lookback_months)).replace(
            hour=0, minute=0, second=0, microsecond=0
        )
        return start, end

    def select_sample(
        self,
        history: Iterable[FuelOperation],
        airline_id: str,
        destination: str,
        now: Optional[datetime] = None,
    ) -> list[FuelOperation]:
        start, end = self.window(now)
        matches = [
            op
            for op in history
            if op.airline_id == str(airline_id)
            and op.destination == destination
            and start <= op.date_time <= end
        ]
        # sorted() is stable, so equal timestamps keep their input order
        matches = sorted(matches, key=lambda op: op.date_time, reverse=True)
        return matches[: self.sample_cap]

    def average(
        self,
        history: Iterable[FuelOperation],
        airline_id: str,
        destination: str,
        now: Optional[datetime] = None,
    ) -> HistoricalAverage:
        start, end = self.window(now)
        sample = self.select_sample(history, airline_id, destination, now=end)
        if not sample:
            return HistoricalAverage(average=0.0, sample_size=0, window_start=start, window_end=end)
        total_liters = sum(op.quantity_liters for op in sample)
        return HistoricalAverage(
            average=total_liters / len(sample),
            sample_size=len(sample),
            window_start=start,
            window_end=end,
        )
