import math

import pytest

from mortgage_sim.config import MAX_TERM_MONTHS
from mortgage_sim.utils import (
    clamp_int_non_negative,
    clamp_non_negative,
    months_label,
    parse_amount,
    term_to_months,
    to_currency,
    to_monthly_rate,
)


def test_to_currency_rounds_half_up_despite_binary_representation():
    # 1.005 is stored just below the decimal value
    assert to_currency(1.005) == 1.01
    assert to_currency(1.234) == 1.23
    assert to_currency(0) == 0.0


def test_to_monthly_rate_is_not_rounded():
    assert to_monthly_rate(12) == pytest.approx(0.01)
    assert to_monthly_rate(4.5) == 4.5 / 100 / 12


def test_clamp_non_negative():
    assert clamp_non_negative(12.5) == 12.5
    assert clamp_non_negative(-3) == 0.0
    assert clamp_non_negative(math.nan) == 0.0
    assert clamp_non_negative(math.inf) == 0.0


def test_clamp_int_non_negative_rounds_half_up():
    assert clamp_int_non_negative(2.5) == 3
    assert clamp_int_non_negative(2.4) == 2
    assert clamp_int_non_negative(-7) == 0
    assert clamp_int_non_negative(math.nan) == 0
    assert clamp_int_non_negative(-math.inf) == 0
    assert isinstance(clamp_int_non_negative(59.6), int)


def test_parse_amount_suffixes_and_separators():
    assert parse_amount("300000") == 300_000
    assert parse_amount("300,000") == 300_000
    assert parse_amount("300k") == 300_000
    assert parse_amount("1.2M") == 1_200_000
    assert parse_amount(" 250 ") == 250


def test_parse_amount_rejects_garbage():
    with pytest.raises(ValueError):
        parse_amount("lots")


def test_months_label():
    assert months_label(30) == "2y 6m"
    assert months_label(360) == "30y 0m"
    assert months_label(0) == "0y 0m"


def test_term_to_months_units():
    assert term_to_months(30) == 360
    assert term_to_months(30, "Years") == 360
    assert term_to_months(18, " MONTHS ") == 18
    assert term_to_months(0, "months") == 1
    assert term_to_months(100, "years") == MAX_TERM_MONTHS


def test_term_to_months_rejects_unknown_unit():
    with pytest.raises(ValueError, match="Term unit"):
        term_to_months(30, "decades")


def test_term_to_months_rejects_oversized_term():
    with pytest.raises(ValueError, match="must not exceed"):
        term_to_months(MAX_TERM_MONTHS + 1, "months")
    with pytest.raises(ValueError):
        term_to_months(1e7)
