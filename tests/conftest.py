"""Shared test fixtures for the fuelcalc test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from fuelcalc.config.settings import Settings
from fuelcalc.models.enums import TrafficType
from fuelcalc.models.operation import Airline, FuelOperation
from fuelcalc.models.projection import ProjectionInputRow

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_op(
    liters=1000.0,
    days_ago=1,
    airline_id="1",
    destination="FRA",
    **overrides,
) -> FuelOperation:
    """Helper to create a FuelOperation with minimal boilerplate."""
    data = {
        "id": overrides.pop("id", f"op-{airline_id}-{destination}-{days_ago}"),
        "date_time": NOW - timedelta(days=days_ago),
        "airline_id": airline_id,
        "destination": destination,
        "quantity_liters": liters,
        "quantity_kg": overrides.pop("quantity_kg", liters * 0.8),
        "price_per_kg": overrides.pop("price_per_kg", 0.5),
    }
    data.update(overrides)
    return FuelOperation(**data)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="http://fuel.test", api_token="", autosave_debounce_seconds=0.05)


@pytest.fixture
def scenario_a_op() -> FuelOperation:
    """1000 kg at 0.5/kg, 10% discount, export traffic."""
    return FuelOperation(
        id="A",
        date_time=NOW,
        quantity_kg=1000,
        price_per_kg=0.5,
        discount_percent=10,
        traffic_type=TrafficType.EXPORT,
    )


@pytest.fixture
def scenario_b_op(scenario_a_op) -> FuelOperation:
    return scenario_a_op.model_copy(
        update={"quantity_liters": 1250.0, "traffic_type": TrafficType.DOMESTIC}
    )


@pytest.fixture
def airlines() -> list[Airline]:
    return [
        Airline(id="1", name="Wizz Air", operating_destinations=["FRA", "BUD"]),
        Airline(id="2", name="Austrian", operating_destinations=["VIE"]),
    ]


@pytest.fixture
def rows() -> list[ProjectionInputRow]:
    return [
        ProjectionInputRow(id="r1", airline_id="2", destination="VIE", monthly_operations_count=4),
        ProjectionInputRow(id="r2", airline_id="1", destination="FRA", monthly_operations_count=2),
    ]
