"""Search for the extra payment needed to pay a loan off early.

The payoff month of a schedule never increases when the monthly extra
payment grows, so the smallest extra payment that meets a target can be
found with a binary search over whole cents, running the engine at every
step.
"""

from __future__ import annotations

import logging
import math

from .data_models import ExtraPaymentSolution, LoanConfig
from .engine import sanitize_config, simulate
from .utils import clamp_int_non_negative, to_currency

logger = logging.getLogger(__name__)


def required_extra_payment(config: LoanConfig, target_months: int) -> ExtraPaymentSolution:
    """Return the minimum monthly extra payment that pays off by ``target_months``.

    Parameters
    ----------
    config: LoanConfig
        The loan. Its ``monthly_extra`` is ignored; the baseline is always
        simulated without extra payments.
    target_months: int
        Month by which the balance must reach zero.

    Raises
    ------
    ValueError
        If ``target_months`` is less than one month.
    """
    target = clamp_int_non_negative(target_months)
    if target < 1:
        raise ValueError(f"Target must be at least one month; got {target_months}")

    config = sanitize_config(config)
    baseline = simulate(config.with_extra(0.0))
    if baseline.payoff_months <= target:
        return ExtraPaymentSolution(
            target_months=target,
            monthly_extra=0.0,
            no_extra_needed=True,
            baseline=baseline,
            result=baseline,
        )

    # Paying the whole balance as extra settles the loan in the first month,
    # so the upper bound always meets the target.
    low = 0
    high = max(1, math.ceil(to_currency(config.principal) * 100))
    best = simulate(config.with_extra(high / 100))
    iterations = 0
    while high - low > 1:
        mid = (low + high) // 2
        candidate = simulate(config.with_extra(mid / 100))
        if candidate.payoff_months <= target:
            high = mid
            best = candidate
        else:
            low = mid
        iterations += 1

    logger.debug(
        "Solved extra payment %.2f for %d months in %d iterations",
        high / 100,
        target,
        iterations,
    )
    return ExtraPaymentSolution(
        target_months=target,
        monthly_extra=high / 100,
        no_extra_needed=False,
        baseline=baseline,
        result=best,
    )
