"""Tests for mass/volume conversions."""

import math
from datetime import datetime

import pytest

from fuelcalc.engine import kg_from_liters, liters_from_kg, specific_density
from fuelcalc.models.operation import FuelOperation


class TestQuantities:
    def test_specific_density(self):
        assert specific_density(1000, 1250) == pytest.approx(0.8)

    def test_density_zero_when_missing(self):
        assert specific_density(0, 1250) == 0
        assert specific_density(1000, 0) == 0

    def test_density_zero_when_not_finite(self):
        assert specific_density(math.inf, 1250) == 0
        assert specific_density(1000, math.nan) == 0

    def test_operation_density_matches(self):
        op = FuelOperation(date_time=datetime(2024, 1, 1), quantity_kg=987.6, quantity_liters=1234.5)
        assert op.specific_density == specific_density(987.6, 1234.5)

    def test_kg_from_liters(self):
        assert kg_from_liters(1234.5, 0.8) == 987.6

    def test_liters_from_kg(self):
        assert liters_from_kg(1000, 0.8) == 1250.0
        assert liters_from_kg(1000, 0.795) == 1257.86

    def test_liters_zero_for_unknown_density(self):
        assert liters_from_kg(1000, 0) == 0
