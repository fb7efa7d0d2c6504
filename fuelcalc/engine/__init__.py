from fuelcalc.models.quantities import kg_from_liters, liters_from_kg, specific_density

from .consolidation import ConsolidationAggregator
from .currency import CurrencyNormalizer
from .history import HistoricalAverager
from .pricing import PricingCalculator
from .projection import ProjectionEngine, validate_rows

__all__ = [
    "ConsolidationAggregator",
    "CurrencyNormalizer",
    "HistoricalAverager",
    "PricingCalculator",
    "ProjectionEngine",
    "kg_from_liters",
    "liters_from_kg",
    "specific_density",
    "validate_rows",
]
