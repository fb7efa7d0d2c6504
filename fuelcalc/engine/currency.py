"""Home-currency (BAM) exchange rate resolution with fallback policy.

The EUR fallback is the official peg. The USD fallback is a rough estimate
and is flagged as such so callers can warn the user.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from fuelcalc.config.settings import EUR_FALLBACK_RATE, USD_FALLBACK_RATE, Settings
from fuelcalc.engine.result import ExchangeRate
from fuelcalc.rounding import round5
from fuelcalc.errors import InvalidCurrency
from fuelcalc.models.enums import Currency, RateProvenance
from fuelcalc.models.operation import FuelOperation

logger = logging.getLogger(__name__)

__all__ = ["CurrencyNormalizer", "EUR_FALLBACK_RATE", "USD_FALLBACK_RATE", "parse_currency"]


def _usable_rate(raw: Any) -> Optional[float]:
    if raw is None:
        return None
    try:
        rate = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def parse_currency(code: Any) -> Currency:
    text = "" if code is None else str(code).strip().upper()
    if not text:
        return Currency.BAM
    try:
        return Currency(text)
    except ValueError:
        raise InvalidCurrency(f"Unsupported currency code: {code!r}") from None


class CurrencyNormalizer:
    """Resolves the effective rate from an operation's currency to BAM."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        eur_fallback: Optional[float] = None,
        usd_fallback: Optional[float] = None,
    ):
        settings = settings or Settings()
        self.eur_fallback = eur_fallback if eur_fallback is not None else settings.eur_fallback_rate
        self.usd_fallback = usd_fallback if usd_fallback is not None else settings.usd_fallback_rate

    def resolve(self, currency: Any, stored_rate: Any = None) -> ExchangeRate:
        code = parse_currency(currency)
        if code == Currency.BAM:
            return ExchangeRate(currency=code, rate=1.0, provenance=RateProvenance.SYSTEM)

        rate = _usable_rate(stored_rate)
        if rate is not None:
            return ExchangeRate(currency=code, rate=rate, provenance=RateProvenance.SYSTEM)

        if code == Currency.EUR:
            return ExchangeRate(
                currency=code,
                rate=self.eur_fallback,
                provenance=RateProvenance.SYSTEM,
                fallback_used=True,
            )

        logger.warning(
            "No stored %s rate, using estimated fallback %s", code.value, self.usd_fallback
        )
        return ExchangeRate(
            currency=code,
            rate=self.usd_fallback,
            provenance=RateProvenance.ESTIMATED,
            fallback_used=True,
        )

    def for_operation(self, operation: FuelOperation) -> ExchangeRate:
        return self.resolve(operation.currency, operation.home_exchange_rate)

    @staticmethod
    def to_home(amount: float, rate: ExchangeRate) -> float:
        return round5(amount * rate.rate)
