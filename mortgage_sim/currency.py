"""Conversion between user currencies and the engine's unit of account.

The engine works in US dollars only. Amounts entered in another currency are
divided by the exchange rate before simulating and multiplied back when the
results are displayed.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Any, Optional

from .data_models import LoanConfig
from .utils import clamp_non_negative

UNIT_OF_ACCOUNT = "USD"
SUPPORTED_CURRENCIES = ("USD", "BOB")

# Bolivianos per US dollar used until a market rate is supplied.
DEFAULT_BOB_EXCHANGE_RATE = 6.96
MIN_EXCHANGE_RATE = 0.0001


def resolve_exchange_rate(currency: str, rate: Optional[float] = None) -> float:
    """Return the number of ``currency`` units per unit of account.

    Raises
    ------
    ValueError
        If the currency is not supported.
    """
    code = currency.upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValueError(f"Unsupported currency: {currency}")
    if code == UNIT_OF_ACCOUNT:
        return 1.0
    if rate is None:
        rate = DEFAULT_BOB_EXCHANGE_RATE
    return max(MIN_EXCHANGE_RATE, clamp_non_negative(rate))


def to_unit_of_account(amount: float, rate: float) -> float:
    return clamp_non_negative(amount) / rate


def from_unit_of_account(amount: float, rate: float) -> float:
    return amount * rate


def convert_config(config: LoanConfig, currency: str, rate: Optional[float] = None) -> LoanConfig:
    """Express the amounts of ``config`` in the unit of account.

    Only ``principal`` and ``monthly_extra`` are amounts; rates and month
    counts are left as they are. Converted values are not rounded so that
    converting the results back reproduces the entered amounts.
    """
    resolved = resolve_exchange_rate(currency, rate)
    if resolved == 1.0:
        return config
    return replace(
        config,
        principal=to_unit_of_account(config.principal, resolved),
        monthly_extra=to_unit_of_account(config.monthly_extra, resolved),
    )


def blue_buy_rate_from_payload(payload: Any) -> Optional[float]:
    """Extract the parallel-market buy rate from an exchange-rate response.

    The service answers with ``{"data": {"blue": {"buy": 9.09}}}``; the buy
    value may be a number or a numeric string. Anything else, including a
    non-positive rate, yields ``None``.
    """
    try:
        buy = payload["data"]["blue"]["buy"]
    except (KeyError, TypeError):
        return None
    try:
        value = float(buy)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value
