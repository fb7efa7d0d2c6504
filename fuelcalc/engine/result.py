"""Immutable calculation results handed to report and document collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from fuelcalc.models.enums import Currency, RateProvenance, TrafficType


@dataclass(frozen=True)
class MonetaryBreakdown:
    """Price decomposition of a single fueling operation."""

    base_amount: float
    discount_amount: float
    net_amount: float
    vat_amount: float
    excise_amount: float
    gross_amount: float
    currency: str
    traffic_type: TrafficType
    net_from_record: bool = False


@dataclass(frozen=True)
class ExchangeRate:
    """Effective currency -> BAM rate and where it came from."""

    currency: Currency
    rate: float
    provenance: RateProvenance
    fallback_used: bool = False

    @property
    def is_estimated(self) -> bool:
        return self.provenance == RateProvenance.ESTIMATED


@dataclass(frozen=True)
class HistoricalAverage:
    average: float
    sample_size: int
    window_start: Optional[datetime] = None
    window_end: Optional[datetime] = None


@dataclass(frozen=True)
class ProjectionResult:
    airline_name: str
    destination: str
    average_fuel_per_operation: float
    monthly_operations_count: int
    monthly_consumption: float
    quarterly_consumption: float
    yearly_consumption: float
    operations_analyzed: int


@dataclass(frozen=True)
class TotalProjection:
    monthly: float = 0.0
    quarterly: float = 0.0
    yearly: float = 0.0


@dataclass(frozen=True)
class ProjectionBatch:
    """Sorted projection rows plus their elementwise total."""

    results: list[ProjectionResult]
    total: TotalProjection


@dataclass(frozen=True)
class ConsumptionGroup:
    """Projected consumption regrouped by airline or destination (chart data)."""

    key: str
    monthly_consumption: float
    quarterly_consumption: float
    yearly_consumption: float


@dataclass(frozen=True)
class MonetaryTotals:
    operation_count: int = 0
    quantity_liters: float = 0.0
    quantity_kg: float = 0.0
    base_amount: float = 0.0
    discount_amount: float = 0.0
    net_amount: float = 0.0
    vat_amount: float = 0.0
    excise_amount: float = 0.0
    gross_amount: float = 0.0


@dataclass(frozen=True)
class ConsolidatedSummary:
    """Totals over a filtered set of operations, for invoices and dashboards."""

    filter_description: str
    totals: MonetaryTotals
    per_currency: dict[str, MonetaryTotals]
    currency_counts: dict[str, int]
    dominant_currency: str
    dominant_currency_net: float
    home_currency_net: float
    home_currency_gross: float
    estimated_rates_used: bool = False
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None


@dataclass(frozen=True)
class ConsolidationResult:
    summary: ConsolidatedSummary
    by_airline: dict[str, MonetaryTotals] = field(default_factory=dict)
    by_destination: dict[str, MonetaryTotals] = field(default_factory=dict)
