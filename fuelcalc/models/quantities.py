"""Mass/volume conversions used when an operator enters a fueling record."""

from __future__ import annotations

import math

from fuelcalc.rounding import round2


def specific_density(quantity_kg: float, quantity_liters: float) -> float:
    """kg per liter when both quantities are known and nonzero, else 0."""
    if not (math.isfinite(quantity_kg) and math.isfinite(quantity_liters)):
        return 0.0
    if quantity_kg == 0 or quantity_liters == 0:
        return 0.0
    return quantity_kg / quantity_liters


def kg_from_liters(quantity_liters: float, density: float) -> float:
    return round2(quantity_liters * density)


def liters_from_kg(quantity_kg: float, density: float) -> float:
    """Liters for a given mass; 0 when the density is unknown."""
    if density <= 0:
        return 0.0
    return round2(quantity_kg / density)
