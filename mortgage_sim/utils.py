"""Utility functions for the mortgage simulator.

This module provides the numeric helpers shared by the engine (currency
rounding, monthly rate conversion and input clamping) and the helpers the
host layers use to parse user input and label durations.
"""

from __future__ import annotations

import math
import sys

from .config import MAX_TERM_MONTHS

MONTHS_IN_YEAR = 12
TERM_UNITS = ("years", "months")

_EPSILON = sys.float_info.epsilon


def to_currency(value: float) -> float:
    """Round ``value`` half-up to two decimal places.

    A machine epsilon is added before scaling so that amounts such as
    ``1.005``, which binary floating point stores slightly below the exact
    decimal, still round up like they would on a billing statement.
    """
    scaled = (value + _EPSILON) * 100 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 100


def to_monthly_rate(apr_percent: float) -> float:
    """Convert an annual rate in percent to a monthly decimal rate."""
    return apr_percent / 100 / MONTHS_IN_YEAR


def clamp_non_negative(value: float) -> float:
    """Return ``value`` clamped to zero when it is negative, NaN or infinite."""
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return max(0.0, value)


def clamp_int_non_negative(value: float) -> int:
    """Round ``value`` half-up to an integer, clamping invalid input to zero."""
    value = float(value)
    if not math.isfinite(value):
        return 0
    return max(0, math.floor(value + 0.5))


def parse_amount(value: str) -> float:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("300000"), thousands separators ("300,000") and
    shorthand with ``k``/``m`` suffixes (e.g. "300k" meaning 300_000).

    Raises
    ------
    ValueError
        If the string is not a valid amount.
    """
    cleaned = str(value).strip().lower().replace(",", "")
    factor = 1.0
    if cleaned.endswith("k"):
        factor = 1_000.0
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = 1_000_000.0
        cleaned = cleaned[:-1]
    try:
        return float(cleaned) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def months_label(months: int) -> str:
    """Return a duration such as ``"12y 6m"`` for a number of months."""
    years, leftover = divmod(int(months), MONTHS_IN_YEAR)
    return f"{years}y {leftover}m"


def term_to_months(term: float, term_unit: str = "years") -> int:
    """Convert a user-entered term into whole months.

    Raises
    ------
    ValueError
        If the unit is neither years nor months, or the term is longer than
        ``MAX_TERM_MONTHS``.
    """
    unit = str(term_unit).strip().lower()
    if unit not in TERM_UNITS:
        raise ValueError(f"Term unit must be 'years' or 'months'; got {term_unit}")
    raw = term * MONTHS_IN_YEAR if unit == "years" else term
    months = max(1, clamp_int_non_negative(raw))
    if months > MAX_TERM_MONTHS:
        raise ValueError(f"Term must not exceed {MAX_TERM_MONTHS} months; got {months}")
    return months
