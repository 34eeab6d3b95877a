"""Core calculation engine for the mortgage simulator.

This module builds month-by-month amortization schedules for loans that start
at a fixed rate and may switch to a variable rate (base rate plus TRE spread)
for the rest of the term. A constant extra principal payment can be added
every month; the scheduled installment is kept unchanged, so extra payments
shorten the loan instead of lowering the installment.

The engine is total: out-of-range input is clamped rather than rejected, and
every stored amount is rounded to cents after each step so that floating
point drift cannot accumulate over long schedules.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from .config import KEEP_PAYMENT, SAFETY_MONTHS_SLACK
from .data_models import AmortizationRow, LoanConfig, SimResult
from .utils import (
    clamp_int_non_negative,
    clamp_non_negative,
    to_currency,
    to_monthly_rate,
)

logger = logging.getLogger(__name__)


def calculate_payment(principal: float, apr_percent: float, months: int) -> float:
    """Return the level monthly payment that amortizes ``principal``.

    The formula is:

        payment = P * i / (1 - (1 + i)^-n)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``. With no months left the whole principal
    is due at once.
    """
    if months <= 0:
        return to_currency(principal)
    if principal <= 0:
        return 0.0
    rate_per_month = to_monthly_rate(apr_percent)
    if rate_per_month == 0:
        return to_currency(principal / months)
    payment = (principal * rate_per_month) / (1 - (1 + rate_per_month) ** -months)
    return to_currency(payment)


def sanitize_config(config: LoanConfig) -> LoanConfig:
    """Clamp every field of ``config`` into its valid range.

    Negative, NaN and infinite amounts and rates become zero; month counts
    are rounded to whole months. The term is at least one month and the
    fixed segment never outlasts it.
    """
    term_months = max(1, clamp_int_non_negative(config.term_months))
    fixed_months = min(clamp_int_non_negative(config.fixed_months), term_months)
    return replace(
        config,
        principal=clamp_non_negative(config.principal),
        term_months=term_months,
        fixed_months=fixed_months,
        fixed_apr=clamp_non_negative(config.fixed_apr),
        variable_base_apr=clamp_non_negative(config.variable_base_apr),
        tre=clamp_non_negative(config.tre),
        monthly_extra=clamp_non_negative(config.monthly_extra),
        mode=KEEP_PAYMENT,
    )


def variable_total_apr(config: LoanConfig) -> float:
    """Return the variable rate in effect after the fixed segment."""
    return to_currency(config.variable_base_apr + config.tre)


def simulate(config: LoanConfig) -> SimResult:
    """Compute the amortization schedule for a loan.

    Parameters
    ----------
    config: LoanConfig
        The loan configuration. It is sanitized first, so any numeric input
        is accepted.

    Returns
    -------
    SimResult
        The schedule, one row per month until the balance reaches zero.
        The final contractual month settles the remaining balance, so a
        sanitized loan always pays off by ``term_months``. The
        ``SAFETY_MONTHS_SLACK`` bound on the loop is only a guard; its
        warning cannot fire for sanitized input.
    """
    config = sanitize_config(config)
    term_months = config.term_months
    fixed_months = config.fixed_months
    variable_apr = variable_total_apr(config)
    monthly_extra = config.monthly_extra
    is_pure_fixed = fixed_months >= term_months
    switches_rate = 0 < fixed_months < term_months

    balance = to_currency(config.principal)
    cumulative_interest = 0.0
    scheduled_payment = calculate_payment(
        balance,
        config.fixed_apr if fixed_months > 0 else variable_apr,
        term_months,
    )

    rows: List[AmortizationRow] = []
    safe_limit = term_months + SAFETY_MONTHS_SLACK
    month = 1
    while balance > 0 and month <= safe_limit:
        if is_pure_fixed or month <= fixed_months:
            apr = config.fixed_apr
        else:
            apr = variable_apr

        # Re-amortize the remaining balance over the remaining term once,
        # when the fixed segment ends.
        if switches_rate and month == fixed_months + 1:
            remaining_months = max(1, term_months - fixed_months)
            scheduled_payment = calculate_payment(balance, variable_apr, remaining_months)

        interest = to_currency(balance * to_monthly_rate(apr))
        if month == term_months:
            # Final contractual month: settle whatever is left.
            scheduled_cap = to_currency(balance + interest)
        else:
            scheduled_cap = to_currency(min(scheduled_payment, balance + interest))
        scheduled_principal = to_currency(max(0.0, scheduled_cap - interest))

        max_extra = to_currency(max(0.0, balance - scheduled_principal))
        extra = min(monthly_extra, max_extra)

        principal = to_currency(scheduled_principal + extra)
        balance = to_currency(max(0.0, balance - principal))
        cumulative_interest = to_currency(cumulative_interest + interest)

        rows.append(
            AmortizationRow(
                month=month,
                apr=to_currency(apr),
                scheduled_payment=scheduled_cap,
                extra=extra,
                interest=interest,
                principal=principal,
                balance=balance,
                cumulative_interest=cumulative_interest,
            )
        )
        month += 1

    if balance > 0:
        logger.warning(
            "Loan did not amortize within %d months; %.2f left unpaid",
            safe_limit,
            balance,
        )
    logger.debug(
        "Simulated %d months, total interest %.2f", len(rows), cumulative_interest
    )

    return SimResult(
        rows=tuple(rows),
        payoff_months=len(rows),
        total_interest=cumulative_interest,
        variable_total_apr=variable_apr,
        term_months=term_months,
    )
