"""Consolidated totals over many operations (bulk invoices, dashboards)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from fuelcalc.engine.currency import CurrencyNormalizer
from fuelcalc.engine.pricing import PricingCalculator
from fuelcalc.engine.result import (
    ConsolidatedSummary,
    ConsolidationResult,
    MonetaryBreakdown,
    MonetaryTotals,
)
from fuelcalc.rounding import round5
from fuelcalc.models.enums import HOME_CURRENCY
from fuelcalc.models.operation import FuelOperation

logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    operation_count: int = 0
    quantity_liters: float = 0.0
    quantity_kg: float = 0.0
    base_amount: float = 0.0
    discount_amount: float = 0.0
    net_amount: float = 0.0
    vat_amount: float = 0.0
    excise_amount: float = 0.0
    gross_amount: float = 0.0

    def add(self, op: FuelOperation, b: MonetaryBreakdown) -> None:
        self.operation_count += 1
        self.quantity_liters = round5(self.quantity_liters + op.quantity_liters)
        self.quantity_kg = round5(self.quantity_kg + op.quantity_kg)
        self.base_amount = round5(self.base_amount + b.base_amount)
        self.discount_amount = round5(self.discount_amount + b.discount_amount)
        self.net_amount = round5(self.net_amount + b.net_amount)
        self.vat_amount = round5(self.vat_amount + b.vat_amount)
        self.excise_amount = round5(self.excise_amount + b.excise_amount)
        self.gross_amount = round5(self.gross_amount + b.gross_amount)

    def freeze(self) -> MonetaryTotals:
        return MonetaryTotals(
            operation_count=self.operation_count,
            quantity_liters=self.quantity_liters,
            quantity_kg=self.quantity_kg,
            base_amount=self.base_amount,
            discount_amount=self.discount_amount,
            net_amount=self.net_amount,
            vat_amount=self.vat_amount,
            excise_amount=self.excise_amount,
            gross_amount=self.gross_amount,
        )


def dominant_currency(counts: dict[str, int]) -> str:
    """Most frequent currency; ties go to the first one encountered."""
    best = HOME_CURRENCY.value
    best_count = 0
    for currency, count in counts.items():
        if count > best_count:
            best, best_count = currency, count
    return best


class ConsolidationAggregator:
    """Folds priced operations into grand, per-currency and grouped totals."""

    def __init__(
        self,
        calculator: Optional[PricingCalculator] = None,
        normalizer: Optional[CurrencyNormalizer] = None,
    ):
        self._calculator = calculator or PricingCalculator()
        self._normalizer = normalizer or CurrencyNormalizer()

    def aggregate(
        self,
        operations: Sequence[FuelOperation],
        filter_description: str = "",
    ) -> ConsolidationResult:
        grand = _Accumulator()
        per_currency: dict[str, _Accumulator] = {}
        by_airline: dict[str, _Accumulator] = {}
        by_destination: dict[str, _Accumulator] = {}
        counts: dict[str, int] = {}
        home_net = 0.0
        home_gross = 0.0
        estimated = False

        for op in operations:
            breakdown = self._calculator.calculate(op)
            rate = self._normalizer.for_operation(op)

            grand.add(op, breakdown)
            per_currency.setdefault(op.currency, _Accumulator()).add(op, breakdown)
            by_airline.setdefault(op.group_airline, _Accumulator()).add(op, breakdown)
            by_destination.setdefault(op.destination, _Accumulator()).add(op, breakdown)
            counts[op.currency] = counts.get(op.currency, 0) + 1

            home_net = round5(home_net + self._normalizer.to_home(breakdown.net_amount, rate))
            home_gross = round5(home_gross + self._normalizer.to_home(breakdown.gross_amount, rate))
            estimated = estimated or rate.is_estimated

        dominant = dominant_currency(counts)
        dominant_totals = per_currency.get(dominant)
        timestamps = [op.date_time for op in operations]

        summary = ConsolidatedSummary(
            filter_description=filter_description,
            totals=grand.freeze(),
            per_currency={c: acc.freeze() for c, acc in per_currency.items()},
            currency_counts=dict(counts),
            dominant_currency=dominant,
            dominant_currency_net=dominant_totals.net_amount if dominant_totals else 0.0,
            home_currency_net=home_net,
            home_currency_gross=home_gross,
            estimated_rates_used=estimated,
            period_start=min(timestamps) if timestamps else None,
            period_end=max(timestamps) if timestamps else None,
        )
        logger.info(
            f"Consolidated {grand.operation_count} operations "
            f"({filter_description or 'no filter'}), dominant currency {dominant}"
        )
        return ConsolidationResult(
            summary=summary,
            by_airline={k: acc.freeze() for k, acc in by_airline.items()},
            by_destination={k: acc.freeze() for k, acc in by_destination.items()},
        )
