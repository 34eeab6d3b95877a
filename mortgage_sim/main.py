"""Command-line interface for the mortgage simulator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute full amortization schedules, view summaries,
compare a loan with and without extra payments, or search for the extra
payment needed to reach a payoff target. Results can be printed to the
terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import click

from .comparison import compare_extra_payment
from .config import LOG_LEVEL, SCHEDULE_PREVIEW_ROWS
from .currency import DEFAULT_BOB_EXCHANGE_RATE, SUPPORTED_CURRENCIES, convert_config, resolve_exchange_rate
from .data_models import AmortizationRow, LoanConfig, SimResult
from .engine import simulate
from .formatter import (
    print_comparison,
    print_schedule,
    print_solution,
    print_summary,
    rows_to_dicts,
    summary_to_dict,
)
from .solver import required_extra_payment
from .utils import MONTHS_IN_YEAR, clamp_int_non_negative, parse_amount, term_to_months


def parse_amount_option(value: Optional[str]) -> float:
    """Parse an amount option, reporting bad input as a click error."""
    if value is None or not str(value).strip():
        return 0.0
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def build_config_from_options(
    principal: str,
    term: float,
    term_unit: str,
    fixed_months: int,
    fixed_apr: float,
    variable_base_apr: float,
    tre: float,
    extra: Optional[str],
    currency: str = "USD",
    exchange_rate: Optional[float] = None,
) -> LoanConfig:
    """Turn raw option values into a ``LoanConfig`` in the unit of account."""
    try:
        term_months = term_to_months(term, term_unit)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    config = LoanConfig(
        principal=parse_amount_option(principal),
        term_months=term_months,
        fixed_months=min(clamp_int_non_negative(fixed_months), term_months),
        fixed_apr=fixed_apr,
        variable_base_apr=variable_base_apr,
        tre=tre,
        monthly_extra=parse_amount_option(extra),
    )
    try:
        return convert_config(config, currency, exchange_rate)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def export_to_json(path: Path, result: SimResult, exchange_rate: float = 1.0) -> None:
    """Export summary and schedule to a JSON file."""
    data = {
        "summary": summary_to_dict(result, exchange_rate),
        "schedule": rows_to_dicts(result.rows, exchange_rate),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, rows: List[AmortizationRow], exchange_rate: float = 1.0) -> None:
    """Export schedule to a CSV file."""
    header = [
        "Month",
        "APR",
        "Scheduled_Payment",
        "Extra",
        "Interest",
        "Principal",
        "Balance",
        "Cumulative_Interest",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for entry in rows_to_dicts(rows, exchange_rate):
            writer.writerow(
                [
                    entry["month"],
                    entry["apr"],
                    entry["scheduled_payment"],
                    entry["extra"],
                    entry["interest"],
                    entry["principal"],
                    entry["balance"],
                    entry["cumulative_interest"],
                ]
            )


def loan_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the loan parameters shared by every command."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Loan amount, e.g. 300k"),
        click.option("--term", "-t", "term", required=True, type=float, help="Loan term"),
        click.option(
            "--term-unit",
            "term_unit",
            type=click.Choice(["years", "months"]),
            default="years",
            show_default=True,
            help="Unit of --term",
        ),
        click.option("--fixed-months", "fixed_months", type=int, default=0, help="Months at the fixed rate"),
        click.option("--fixed-apr", "fixed_apr", type=float, default=0.0, help="Fixed annual rate (percent)"),
        click.option("--variable-base-apr", "variable_base_apr", type=float, default=0.0, help="Variable base annual rate (percent)"),
        click.option("--tre", "tre", type=float, default=0.0, help="Spread added to the variable base rate (percent)"),
        click.option("--extra", "extra", default=None, help="Extra principal paid every month"),
        click.option(
            "--currency",
            "currency",
            type=click.Choice(list(SUPPORTED_CURRENCIES), case_sensitive=False),
            default="USD",
            show_default=True,
            help="Currency of the amounts entered",
        ),
        click.option(
            "--exchange-rate",
            "exchange_rate",
            type=float,
            default=None,
            help=f"Units of --currency per USD (default {DEFAULT_BOB_EXCHANGE_RATE} for BOB)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _config_and_rate(params: Dict[str, Any]) -> Tuple[LoanConfig, float]:
    config = build_config_from_options(**params)
    rate = resolve_exchange_rate(params["currency"], params["exchange_rate"])
    return config, rate


@click.group()
@click.option(
    "--log-level",
    "log_level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=LOG_LEVEL,
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """A command-line mortgage simulator for fixed-then-variable loans."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(output: Optional[str], **params: Any) -> None:
    """Compute and print the full amortization schedule."""
    config, rate = _config_and_rate(params)
    result = simulate(config)
    currency = params["currency"].upper()
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result, rate)
            click.echo(f"Schedule exported to {path}")
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, list(result.rows), rate)
            click.echo(f"Schedule exported to {path}")
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        return

    print_summary(result, currency, rate)
    # Limit schedule length printed to avoid flooding the terminal
    if len(result.rows) > SCHEDULE_PREVIEW_ROWS:
        click.echo(
            f"Schedule has {len(result.rows)} rows; showing first {SCHEDULE_PREVIEW_ROWS} rows."
        )
        print_schedule(result.rows[:SCHEDULE_PREVIEW_ROWS], rate)
    else:
        print_schedule(result.rows, rate)


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(output: Optional[str], **params: Any) -> None:
    """Compute and print only the summary metrics for a loan."""
    config, rate = _config_and_rate(params)
    result = simulate(config)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_to_dict(result, rate)}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result, params["currency"].upper(), rate)


@cli.command()
@loan_options
def compare(**params: Any) -> None:
    """Compare the loan with and without the monthly extra payment."""
    config, rate = _config_and_rate(params)
    print_comparison(compare_extra_payment(config), params["currency"].upper(), rate)


@cli.command("solve-extra")
@loan_options
@click.option("--target-months", "target_months", type=int, help="Desired payoff month")
@click.option("--target-years", "target_years", type=float, help="Desired payoff in years")
def solve_extra(target_months: Optional[int], target_years: Optional[float], **params: Any) -> None:
    """Find the monthly extra payment needed to pay off by a target date."""
    if target_months is None and target_years is None:
        raise click.UsageError("Provide --target-months or --target-years")
    if target_months is None:
        target_months = clamp_int_non_negative(target_years * MONTHS_IN_YEAR)
    config, rate = _config_and_rate(params)
    try:
        solution = required_extra_payment(config, target_months)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    print_solution(solution, params["currency"].upper(), rate)


if __name__ == "__main__":
    cli()
