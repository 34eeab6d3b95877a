"""Data models for the mortgage simulator.

This module defines dataclasses representing the entities used by the
simulator: the loan configuration fed to the engine, the amortization rows
it produces, the simulation result, and the outputs of the extra-payment
solver and the scenario comparison. All of them are frozen; a new set is
created on every engine run.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from .config import KEEP_PAYMENT
from .utils import to_currency


@dataclass(frozen=True)
class LoanConfig:
    """Configuration of a mortgage.

    Amounts are expressed in a single unit of account; converting a foreign
    currency principal happens before the configuration reaches the engine.

    Attributes
    ----------
    principal: float
        Initial balance of the loan.
    term_months: int
        Contractual term in months.
    fixed_months: int
        Number of months charged at ``fixed_apr`` before the rate switches to
        the variable rate.
    fixed_apr: float
        Annual rate in percent during the fixed segment (4.5 means 4.5 %).
    variable_base_apr: float
        Annual base rate in percent applied after the fixed segment.
    tre: float
        Spread added to ``variable_base_apr`` to form the variable rate.
    monthly_extra: float
        Extra principal paid every month on top of the scheduled payment.
    mode: str
        Repayment mode. Only ``"keep_payment"`` is modelled.
    """

    principal: float
    term_months: int
    fixed_months: int
    fixed_apr: float
    variable_base_apr: float
    tre: float
    monthly_extra: float
    mode: str = KEEP_PAYMENT

    def with_extra(self, monthly_extra: float) -> "LoanConfig":
        """Return a copy of this configuration with a different extra payment."""
        return replace(self, monthly_extra=monthly_extra)


@dataclass(frozen=True)
class AmortizationRow:
    """One month of the amortization schedule.

    ``scheduled_payment`` is the contractual payment actually applied that
    month, which may be smaller than the nominal installment in the month
    the loan is paid off. ``principal`` includes ``extra``.
    """

    month: int
    apr: float
    scheduled_payment: float
    extra: float
    interest: float
    principal: float
    balance: float
    cumulative_interest: float


@dataclass(frozen=True)
class SimResult:
    """Outcome of a single engine run."""

    rows: Tuple[AmortizationRow, ...]
    payoff_months: int
    total_interest: float
    variable_total_apr: float
    term_months: int

    @property
    def final_balance(self) -> float:
        return self.rows[-1].balance if self.rows else 0.0

    @property
    def paid_off(self) -> bool:
        """True when the schedule ends with a zero balance.

        Engine output always pays off by its term; only a hand-built result
        can end with a balance left.
        """
        return self.final_balance == 0

    @property
    def exceeded_term(self) -> bool:
        return self.payoff_months > self.term_months


@dataclass(frozen=True)
class ExtraPaymentSolution:
    """Smallest constant extra payment that pays a loan off by a target month.

    Attributes
    ----------
    target_months: int
        Month by which the loan must be paid off.
    monthly_extra: float
        Required extra payment per month, in whole cents. Zero when
        ``no_extra_needed`` is set.
    no_extra_needed: bool
        The loan already pays off by ``target_months`` without extra payments.
    baseline: SimResult
        Schedule without extra payments.
    result: SimResult
        Schedule with ``monthly_extra`` applied.
    """

    target_months: int
    monthly_extra: float
    no_extra_needed: bool
    baseline: SimResult
    result: SimResult

    @property
    def months_saved(self) -> int:
        return max(0, self.baseline.payoff_months - self.result.payoff_months)

    @property
    def interest_saved(self) -> float:
        return to_currency(max(0.0, self.baseline.total_interest - self.result.total_interest))


@dataclass(frozen=True)
class ScenarioComparison:
    """A loan simulated with and without its monthly extra payment."""

    baseline: SimResult
    with_extra: SimResult
    months_saved: int
    interest_avoided: float


@dataclass(frozen=True)
class ChartRow:
    """Balances and cumulative interest of both scenarios for one month."""

    month: int
    baseline_balance: float
    extra_balance: float
    baseline_interest: float
    extra_interest: float
