import logging

from flask import Flask, jsonify, request

from mortgage_sim.comparison import build_chart_rows, compare_extra_payment
from mortgage_sim.config import LOG_LEVEL, SCHEDULE_PREVIEW_ROWS, WEB_HOST, WEB_PORT
from mortgage_sim.currency import convert_config, resolve_exchange_rate
from mortgage_sim.data_models import LoanConfig
from mortgage_sim.formatter import rows_to_dicts, summary_to_dict
from mortgage_sim.solver import required_extra_payment
from mortgage_sim.utils import clamp_int_non_negative, parse_amount, term_to_months, to_currency

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SCHEDULE_PREVIEW_ROWS"] = SCHEDULE_PREVIEW_ROWS


def _number(payload: dict, key: str, default: float = 0.0) -> float:
    value = payload.get(key, default)
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return parse_amount(value)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for {key}: {value!r}") from exc


def _flag(value) -> bool:
    """Read a checkbox-style flag; form posts send it as the string "1"."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true")
    return value is True


def _payload_to_config(payload: dict):
    """Build a ``LoanConfig`` in the unit of account and the display exchange rate."""
    term_months = term_to_months(_number(payload, "term"), payload.get("term_unit") or "years")
    currency = str(payload.get("currency", "USD")).upper()
    exchange_rate = payload.get("exchange_rate")
    rate = resolve_exchange_rate(
        currency, None if exchange_rate in (None, "") else _number(payload, "exchange_rate")
    )
    config = LoanConfig(
        principal=_number(payload, "principal"),
        term_months=term_months,
        fixed_months=min(clamp_int_non_negative(_number(payload, "fixed_months")), term_months),
        fixed_apr=_number(payload, "fixed_apr"),
        variable_base_apr=_number(payload, "variable_base_apr"),
        tre=_number(payload, "tre"),
        monthly_extra=_number(payload, "monthly_extra"),
    )
    return convert_config(config, currency, rate), rate


def _schedule_view(rows, rate: float, show_full_schedule: bool):
    """Return the serialised schedule, truncated unless the full view is requested."""
    limit = app.config["SCHEDULE_PREVIEW_ROWS"]
    if show_full_schedule or len(rows) <= limit:
        return rows_to_dicts(rows, rate), 0
    return rows_to_dicts(rows[:limit], rate), len(rows) - limit


def _request_payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return payload


@app.errorhandler(ValueError)
def handle_invalid_input(exc: ValueError):
    logger.info("Rejected request: %s", exc)
    return jsonify({"error": str(exc)}), 400


@app.get("/health")
def health():
    return jsonify({"status": "ok"})


@app.post("/api/simulate")
def simulate_loan():
    payload = _request_payload()
    config, rate = _payload_to_config(payload)
    show_full_schedule = _flag(payload.get("full_schedule"))
    comparison = compare_extra_payment(config)

    baseline_schedule, baseline_truncated = _schedule_view(
        comparison.baseline.rows, rate, show_full_schedule
    )
    extra_schedule, extra_truncated = _schedule_view(
        comparison.with_extra.rows, rate, show_full_schedule
    )
    chart_rows = build_chart_rows(comparison.baseline.rows, comparison.with_extra.rows)
    return jsonify(
        {
            "currency": str(payload.get("currency", "USD")).upper(),
            "exchange_rate": rate,
            "baseline": summary_to_dict(comparison.baseline, rate),
            "with_extra": summary_to_dict(comparison.with_extra, rate),
            "months_saved": comparison.months_saved,
            "interest_avoided": to_currency(comparison.interest_avoided * rate),
            "chart": [
                {
                    "month": row.month,
                    "baseline_balance": to_currency(row.baseline_balance * rate),
                    "extra_balance": to_currency(row.extra_balance * rate),
                    "baseline_interest": to_currency(row.baseline_interest * rate),
                    "extra_interest": to_currency(row.extra_interest * rate),
                }
                for row in chart_rows
            ],
            "baseline_schedule": baseline_schedule,
            "extra_schedule": extra_schedule,
            "truncated": max(baseline_truncated, extra_truncated),
        }
    )


@app.post("/api/required-extra")
def required_extra():
    payload = _request_payload()
    config, rate = _payload_to_config(payload)
    target_months = clamp_int_non_negative(_number(payload, "target_months"))
    solution = required_extra_payment(config, target_months)
    return jsonify(
        {
            "target_months": solution.target_months,
            "no_extra_needed": solution.no_extra_needed,
            "monthly_extra": to_currency(solution.monthly_extra * rate),
            "baseline": summary_to_dict(solution.baseline, rate),
            "result": summary_to_dict(solution.result, rate),
            "months_saved": solution.months_saved,
            "interest_saved": to_currency(solution.interest_saved * rate),
        }
    )


if __name__ == "__main__":
    print("Starting mortgage simulator API...")
    app.run(host=WEB_HOST, port=WEB_PORT, debug=True)
