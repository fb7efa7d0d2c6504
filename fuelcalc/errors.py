"""Error taxonomy for the calculation engine, plus a tagged result type.

Calculators raise these exceptions where a precondition is violated. Batch
callers that prefer values over exceptions wrap calls with ``attempt()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class FuelCalcError(Exception):
    """Base class for every error raised by fuelcalc."""

    code = "fuelcalc_error"


class InvalidOperationData(FuelCalcError, ValueError):
    """Negative or NaN quantity or price on a fuel operation."""

    code = "invalid_operation_data"


class InvalidCurrency(FuelCalcError, ValueError):
    """Currency code outside BAM/EUR/USD."""

    code = "invalid_currency"


class IncompleteInputRow(FuelCalcError, ValueError):
    """Projection input row missing airline/destination or with zero count."""

    code = "incomplete_input_row"

    def __init__(self, message: str, row_id: Optional[str] = None):
        super().__init__(message)
        self.row_id = row_id


class HistoryUnavailable(FuelCalcError):
    """The external history source failed (not the same as 'no history')."""

    code = "history_unavailable"


class PersistenceFailure(FuelCalcError):
    """Loading or saving the projection preset failed."""

    code = "persistence_failure"

    def __init__(self, message: str, batch: Any = None):
        super().__init__(message)
        # Results computed before an explicit save failed, if any
        self.batch = batch


class SyncStateError(FuelCalcError):
    """A preset edit arrived before the sync was initialised."""

    code = "sync_state_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a computed value or the FuelCalcError that prevented it."""

    value: Optional[T] = None
    error: Optional[FuelCalcError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error is not None else None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: FuelCalcError) -> Outcome[T]:
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, re-raising the captured error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
    """Call fn and capture any FuelCalcError as a failed Outcome."""
    try:
        return Outcome.success(fn(*args, **kwargs))
    except FuelCalcError as e:
        return Outcome.failure(e)
