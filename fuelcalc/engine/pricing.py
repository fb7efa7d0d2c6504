"""Per-operation monetary breakdown: base, discount, net, VAT, excise, gross."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from fuelcalc.config.settings import Settings
from fuelcalc.engine.result import MonetaryBreakdown
from fuelcalc.rounding import round5
from fuelcalc.errors import InvalidOperationData, Outcome, attempt
from fuelcalc.models.enums import TrafficType
from fuelcalc.models.operation import FuelOperation

logger = logging.getLogger(__name__)


def _check_non_negative(name: str, value: float, operation_id: str) -> None:
    if math.isnan(value) or value < 0:
        raise InvalidOperationData(
            f"Operation {operation_id or '<new>'}: {name} must be a non-negative number, got {value}"
        )


class PricingCalculator:
    """Stateless calculator turning one FuelOperation into a MonetaryBreakdown."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or Settings()
        self.vat_rate = settings.vat_rate
        self.excise_per_liter = settings.excise_per_liter

    def calculate(self, operation: FuelOperation) -> MonetaryBreakdown:
        _check_non_negative("quantity_kg", operation.quantity_kg, operation.id)
        _check_non_negative("price_per_kg", operation.price_per_kg, operation.id)
        _check_non_negative("quantity_liters", operation.quantity_liters, operation.id)

        base = round5(operation.quantity_kg * operation.price_per_kg)
        discount = round5(base * (operation.discount_percent / 100))

        recorded = operation.total_amount
        net_from_record = recorded is not None and recorded > 0
        if net_from_record:
            net = round5(recorded)
        else:
            net = round5(base - discount)

        if operation.traffic_type == TrafficType.DOMESTIC:
            vat = round5(net * self.vat_rate)
            excise = round5(operation.quantity_liters * self.excise_per_liter)
            gross = round5(net + vat + excise)
        else:
            vat = 0.0
            excise = 0.0
            gross = net

        return MonetaryBreakdown(
            base_amount=base,
            discount_amount=discount,
            net_amount=net,
            vat_amount=vat,
            excise_amount=excise,
            gross_amount=gross,
            currency=operation.currency,
            traffic_type=operation.traffic_type,
            net_from_record=net_from_record,
        )

    def price_many(
        self, operations: Iterable[FuelOperation]
    ) -> list[Outcome[MonetaryBreakdown]]:
        """Price every operation, capturing bad records instead of aborting."""
        outcomes = [attempt(self.calculate, op) for op in operations]
        failed = sum(1 for o in outcomes if not o.ok)
        if failed:
            logger.warning(f"{failed} of {len(outcomes)} operations could not be priced")
        return outcomes
