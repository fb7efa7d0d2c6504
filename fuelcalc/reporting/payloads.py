"""JSON-ready payloads for invoice and projection document generators."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Iterable, Optional, Sequence

from fuelcalc.engine.consolidation import ConsolidationAggregator
from fuelcalc.engine.currency import CurrencyNormalizer
from fuelcalc.engine.pricing import PricingCalculator
from fuelcalc.engine.projection import ProjectionEngine
from fuelcalc.engine.result import (
    ExchangeRate,
    MonetaryBreakdown,
    MonetaryTotals,
    ProjectionBatch,
)
from fuelcalc.errors import attempt
from fuelcalc.models.enums import TrafficType
from fuelcalc.models.operation import FuelOperation

# Labels printed on invoices
TRAFFIC_LABELS = {
    TrafficType.EXPORT: "Izvoz",
    TrafficType.DOMESTIC: "Unutarnji saobraćaj",
}


def to_json(payload: dict) -> str:
    return json.dumps(payload, default=str)


def breakdown_to_dict(breakdown: MonetaryBreakdown) -> dict[str, Any]:
    data = asdict(breakdown)
    data["traffic_type"] = breakdown.traffic_type.value
    data["traffic_label"] = TRAFFIC_LABELS[breakdown.traffic_type]
    return data


def _rate_to_dict(rate: ExchangeRate) -> dict[str, Any]:
    return {
        "currency": rate.currency.value,
        "rate": rate.rate,
        "provenance": rate.provenance.value,
        "fallback_used": rate.fallback_used,
        "estimated": rate.is_estimated,
    }


def _totals_to_dict(totals: MonetaryTotals) -> dict[str, Any]:
    return asdict(totals)


def _operation_to_dict(op: FuelOperation) -> dict[str, Any]:
    return {
        "id": op.id,
        "date_time": op.date_time.isoformat(),
        "airline_id": op.airline_id,
        "airline_name": op.group_airline,
        "destination": op.destination,
        "quantity_liters": op.quantity_liters,
        "quantity_kg": op.quantity_kg,
        "specific_density": op.specific_density,
        "price_per_kg": op.price_per_kg,
        "discount_percent": op.discount_percent,
        "currency": op.currency,
    }


def operation_invoice_payload(
    operation: FuelOperation,
    calculator: Optional[PricingCalculator] = None,
    normalizer: Optional[CurrencyNormalizer] = None,
) -> dict[str, Any]:
    """Single-operation invoice: the record, its breakdown and the BAM rate."""
    calculator = calculator or PricingCalculator()
    normalizer = normalizer or CurrencyNormalizer()

    breakdown = calculator.calculate(operation)
    rate = normalizer.for_operation(operation)
    return {
        "operation": _operation_to_dict(operation),
        "breakdown": breakdown_to_dict(breakdown),
        "exchange_rate": _rate_to_dict(rate),
        "home_currency_net": normalizer.to_home(breakdown.net_amount, rate),
        "home_currency_gross": normalizer.to_home(breakdown.gross_amount, rate),
    }


def consolidated_invoice_payload(
    operations: Sequence[FuelOperation],
    filter_description: str = "",
    calculator: Optional[PricingCalculator] = None,
    normalizer: Optional[CurrencyNormalizer] = None,
) -> dict[str, Any]:
    """Bulk invoice over filtered operations.

    Records that cannot be priced or converted to BAM are listed under
    ``rejected`` with their error code and left out of every total.
    """
    calculator = calculator or PricingCalculator()
    normalizer = normalizer or CurrencyNormalizer()

    line_items: list[dict[str, Any]] = []
    rejected: list[dict[str, Any]] = []
    priced: list[FuelOperation] = []
    for op, outcome in zip(operations, calculator.price_many(operations)):
        rate = attempt(normalizer.for_operation, op)
        failed = next((o for o in (outcome, rate) if not o.ok), None)
        if failed is not None:
            rejected.append(
                {"id": op.id, "error": failed.error_code, "message": str(failed.error)}
            )
            continue
        priced.append(op)
        line_items.append(
            {
                **_operation_to_dict(op),
                "breakdown": breakdown_to_dict(outcome.value),
                "exchange_rate": _rate_to_dict(rate.value),
            }
        )

    result = ConsolidationAggregator(calculator, normalizer).aggregate(
        priced, filter_description
    )
    summary = result.summary
    return {
        "summary": {
            "filter_description": summary.filter_description,
            "totals": _totals_to_dict(summary.totals),
            "per_currency": {c: _totals_to_dict(t) for c, t in summary.per_currency.items()},
            "currency_counts": summary.currency_counts,
            "dominant_currency": summary.dominant_currency,
            "dominant_currency_net": summary.dominant_currency_net,
            "home_currency_net": summary.home_currency_net,
            "home_currency_gross": summary.home_currency_gross,
            "estimated_rates_used": summary.estimated_rates_used,
            "period_start": summary.period_start.isoformat() if summary.period_start else None,
            "period_end": summary.period_end.isoformat() if summary.period_end else None,
        },
        "by_airline": {k: _totals_to_dict(t) for k, t in result.by_airline.items()},
        "by_destination": {k: _totals_to_dict(t) for k, t in result.by_destination.items()},
        "line_items": line_items,
        "rejected": rejected,
    }


def projection_report_payload(
    batch: ProjectionBatch,
    selected_airlines: Optional[Iterable[str]] = None,
) -> dict[str, Any]:
    """Projection table, totals and chart series grouped by airline and destination."""
    selected = list(selected_airlines or ())
    return {
        "results": [asdict(r) for r in batch.results],
        "total": asdict(batch.total),
        "charts": {
            "by_airline": [asdict(g) for g in ProjectionEngine.by_airline(batch.results, selected)],
            "by_destination": [
                asdict(g) for g in ProjectionEngine.by_destination(batch.results, selected)
            ],
        },
        "selected_airlines": selected,
    }
