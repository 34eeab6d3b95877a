"""Side-by-side comparison of a loan with and without extra payments."""

from __future__ import annotations

from typing import List, Sequence

from .data_models import AmortizationRow, ChartRow, LoanConfig, ScenarioComparison
from .engine import simulate
from .utils import to_currency


def compare_extra_payment(config: LoanConfig) -> ScenarioComparison:
    """Simulate ``config`` as given and again with no extra payment."""
    baseline = simulate(config.with_extra(0.0))
    with_extra = simulate(config)
    return ScenarioComparison(
        baseline=baseline,
        with_extra=with_extra,
        months_saved=max(0, baseline.payoff_months - with_extra.payoff_months),
        interest_avoided=to_currency(
            max(0.0, baseline.total_interest - with_extra.total_interest)
        ),
    )


def build_chart_rows(
    baseline_rows: Sequence[AmortizationRow],
    extra_rows: Sequence[AmortizationRow],
) -> List[ChartRow]:
    """Align two schedules month by month for charting.

    The result covers the longer of the two schedules. Once the shorter one
    has ended, its last balance and cumulative interest are carried forward.
    """
    length = max(len(baseline_rows), len(extra_rows))
    if length == 0:
        return []

    last_baseline = baseline_rows[0] if baseline_rows else None
    last_extra = extra_rows[0] if extra_rows else None
    chart: List[ChartRow] = []
    for index in range(length):
        if index < len(baseline_rows):
            last_baseline = baseline_rows[index]
        if index < len(extra_rows):
            last_extra = extra_rows[index]
        chart.append(
            ChartRow(
                month=index + 1,
                baseline_balance=last_baseline.balance if last_baseline else 0.0,
                extra_balance=last_extra.balance if last_extra else 0.0,
                baseline_interest=last_baseline.cumulative_interest if last_baseline else 0.0,
                extra_interest=last_extra.cumulative_interest if last_extra else 0.0,
            )
        )
    return chart
