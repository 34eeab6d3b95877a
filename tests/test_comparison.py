from dataclasses import replace

from mortgage_sim.comparison import build_chart_rows, compare_extra_payment
from mortgage_sim.engine import simulate
from mortgage_sim.utils import to_currency


def test_compare_extra_payment(base_config):
    comparison = compare_extra_payment(replace(base_config, monthly_extra=250))
    assert comparison.baseline == simulate(base_config)
    assert comparison.months_saved == comparison.baseline.payoff_months - comparison.with_extra.payoff_months
    assert comparison.months_saved > 0
    assert comparison.interest_avoided == to_currency(
        comparison.baseline.total_interest - comparison.with_extra.total_interest
    )


def test_compare_without_extra_saves_nothing(base_config):
    comparison = compare_extra_payment(base_config)
    assert comparison.months_saved == 0
    assert comparison.interest_avoided == 0


def test_chart_rows_carry_finished_schedule_forward(base_config):
    baseline = simulate(base_config)
    with_extra = simulate(replace(base_config, monthly_extra=500))
    chart = build_chart_rows(baseline.rows, with_extra.rows)

    assert len(chart) == baseline.payoff_months
    assert [row.month for row in chart[:3]] == [1, 2, 3]
    assert chart[0].extra_balance == with_extra.rows[0].balance
    tail = chart[-1]
    assert tail.baseline_balance == 0
    assert tail.extra_balance == 0
    assert tail.extra_interest == with_extra.total_interest
    assert tail.baseline_interest == baseline.total_interest


def test_chart_rows_for_empty_schedules(base_config):
    assert build_chart_rows([], []) == []

    baseline = simulate(replace(base_config, term_months=12))
    chart = build_chart_rows(baseline.rows, [])
    assert len(chart) == 12
    assert all(row.extra_balance == 0 and row.extra_interest == 0 for row in chart)
