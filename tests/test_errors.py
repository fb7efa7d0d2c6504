"""Tests for the error taxonomy and Outcome wrapper."""

import pytest

from fuelcalc.errors import (
    FuelCalcError,
    HistoryUnavailable,
    IncompleteInputRow,
    InvalidCurrency,
    Outcome,
    attempt,
)


def _fail(exc):
    raise exc


class TestOutcome:
    def test_success(self):
        outcome = attempt(lambda x: x * 2, 21)
        assert outcome.ok
        assert outcome.unwrap() == 42
        assert outcome.error_code is None

    def test_failure_captured(self):
        outcome = attempt(_fail, InvalidCurrency("GBP"))
        assert not outcome.ok
        assert outcome.error_code == "invalid_currency"
        with pytest.raises(InvalidCurrency):
            outcome.unwrap()

    def test_other_exceptions_propagate(self):
        with pytest.raises(ZeroDivisionError):
            attempt(lambda: 1 / 0)

    def test_constructors(self):
        assert Outcome.success(1).value == 1
        assert Outcome.failure(HistoryUnavailable("down")).error_code == "history_unavailable"


class TestHierarchy:
    def test_all_errors_share_base(self):
        for exc in (HistoryUnavailable("x"), IncompleteInputRow("x"), InvalidCurrency("x")):
            assert isinstance(exc, FuelCalcError)

    def test_row_id_carried(self):
        assert IncompleteInputRow("missing", row_id="r9").row_id == "r9"
