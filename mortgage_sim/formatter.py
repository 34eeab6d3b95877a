"""Output helpers for the mortgage simulator.

This module provides simple functions to render amortization schedules,
summaries and scenario comparisons in a tabular text format. Amounts are
multiplied by ``exchange_rate`` before printing so that results come back in
the currency the user entered.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from .data_models import AmortizationRow, ExtraPaymentSolution, ScenarioComparison, SimResult
from .utils import months_label, to_currency


def print_summary(result: SimResult, currency: str = "USD", exchange_rate: float = 1.0) -> None:
    """Print the headline figures of a simulation in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Variable APR       : {result.variable_total_apr:.2f}%")
    print(f"Payoff             : {result.payoff_months} months ({months_label(result.payoff_months)})")
    print(f"Total interest     : {result.total_interest * exchange_rate:,.2f} {currency}")
    if result.rows:
        first = result.rows[0]
        print(f"First payment      : {first.scheduled_payment * exchange_rate:,.2f} {currency}")
        if first.extra:
            print(f"Monthly extra      : {first.extra * exchange_rate:,.2f} {currency}")
    if not result.paid_off:
        print(f"WARNING: loan does not amortize; {result.final_balance * exchange_rate:,.2f} {currency} left unpaid")
    elif result.exceeded_term:
        print("WARNING: payoff runs past the contractual term")
    print("-" * 72)


def print_schedule(rows: Iterable[AmortizationRow], exchange_rate: float = 1.0) -> None:
    """Print the amortization schedule as a simple table."""
    headers = [
        "Month",
        "APR",
        "Payment",
        "Extra",
        "Interest",
        "Principal",
        "Balance",
        "CumInterest",
    ]
    print("\t".join(headers))
    for row in rows:
        cells = [
            str(row.month),
            f"{row.apr:.2f}",
            f"{row.scheduled_payment * exchange_rate:.2f}",
            f"{row.extra * exchange_rate:.2f}",
            f"{row.interest * exchange_rate:.2f}",
            f"{row.principal * exchange_rate:.2f}",
            f"{row.balance * exchange_rate:.2f}",
            f"{row.cumulative_interest * exchange_rate:.2f}",
        ]
        print("\t".join(cells))


def print_comparison(comparison: ScenarioComparison, currency: str = "USD", exchange_rate: float = 1.0) -> None:
    """Print the baseline and extra-payment scenarios side by side.

    The difference column is baseline minus extra, so positive numbers are
    savings.
    """
    baseline = comparison.baseline
    with_extra = comparison.with_extra
    print("Comparison")
    print("=" * 72)
    print(f"{'Metric':20s} {'Baseline':>15s} {'With extra':>15s} {'Saved':>15s}")
    print(
        f"{'payoff_months':20s} {baseline.payoff_months:15d} "
        f"{with_extra.payoff_months:15d} {comparison.months_saved:15d}"
    )
    print(
        f"{'total_interest':20s} {baseline.total_interest * exchange_rate:15.2f} "
        f"{with_extra.total_interest * exchange_rate:15.2f} "
        f"{comparison.interest_avoided * exchange_rate:15.2f}"
    )
    print("=" * 72)
    print(f"Time saved         : {months_label(comparison.months_saved)}")
    print(f"Interest avoided   : {comparison.interest_avoided * exchange_rate:,.2f} {currency}")


def print_solution(solution: ExtraPaymentSolution, currency: str = "USD", exchange_rate: float = 1.0) -> None:
    """Print the outcome of the required extra-payment search."""
    target = solution.target_months
    print(f"Target payoff      : {target} months ({months_label(target)})")
    print(f"Baseline payoff    : {solution.baseline.payoff_months} months")
    if solution.no_extra_needed:
        print("No extra payment needed")
        return
    print(f"Required extra     : {solution.monthly_extra * exchange_rate:,.2f} {currency} per month")
    print(f"New payoff         : {solution.result.payoff_months} months")
    print(f"Interest saved     : {solution.interest_saved * exchange_rate:,.2f} {currency}")


def summary_to_dict(result: SimResult, exchange_rate: float = 1.0) -> Dict[str, Any]:
    """Convert the headline figures of ``result`` into a JSON-serialisable dict."""
    first_payment = result.rows[0].scheduled_payment if result.rows else 0.0
    return {
        "payoff_months": result.payoff_months,
        "payoff_label": months_label(result.payoff_months),
        "term_months": result.term_months,
        "total_interest": to_currency(result.total_interest * exchange_rate),
        "first_payment": to_currency(first_payment * exchange_rate),
        "variable_total_apr": result.variable_total_apr,
        "paid_off": result.paid_off,
        "exceeded_term": result.exceeded_term,
    }


def rows_to_dicts(rows: Iterable[AmortizationRow], exchange_rate: float = 1.0) -> List[Dict[str, Any]]:
    """Convert schedule rows into dictionaries, amounts in the display currency."""
    serialized = []
    for row in rows:
        serialized.append(
            {
                "month": row.month,
                "apr": row.apr,
                "scheduled_payment": to_currency(row.scheduled_payment * exchange_rate),
                "extra": to_currency(row.extra * exchange_rate),
                "interest": to_currency(row.interest * exchange_rate),
                "principal": to_currency(row.principal * exchange_rate),
                "balance": to_currency(row.balance * exchange_rate),
                "cumulative_interest": to_currency(row.cumulative_interest * exchange_rate),
            }
        )
    return serialized
