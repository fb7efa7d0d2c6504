from .enums import Currency, RateProvenance, SyncState, TrafficType
from .operation import Airline, FuelOperation
from .projection import ProjectionInputRow
from .quantities import kg_from_liters, liters_from_kg, specific_density

__all__ = [
    "Airline",
    "Currency",
    "FuelOperation",
    "ProjectionInputRow",
    "RateProvenance",
    "SyncState",
    "TrafficType",
    "kg_from_liters",
    "liters_from_kg",
    "specific_density",
]
