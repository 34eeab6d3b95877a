import pytest

from mortgage_sim_web.app import app

LOAN = {
    "principal": 300000,
    "term": 30,
    "term_unit": "years",
    "fixed_months": 60,
    "fixed_apr": 4.5,
    "variable_base_apr": 6,
    "tre": 2.25,
    "monthly_extra": 250,
}


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_simulate_returns_both_scenarios(client):
    response = client.post("/api/simulate", json=LOAN)
    assert response.status_code == 200
    data = response.get_json()
    assert data["baseline"]["payoff_months"] == 360
    assert data["with_extra"]["payoff_months"] < 360
    assert data["months_saved"] == 360 - data["with_extra"]["payoff_months"]
    assert data["interest_avoided"] > 0
    assert len(data["chart"]) == 360
    assert len(data["baseline_schedule"]) == 120
    assert data["truncated"] == 240


def test_simulate_full_schedule(client):
    response = client.post("/api/simulate", json={**LOAN, "full_schedule": True})
    data = response.get_json()
    assert len(data["baseline_schedule"]) == 360
    assert data["truncated"] == 0


def test_simulate_converts_currency_back(client):
    payload = {**LOAN, "principal": "1.2m", "currency": "BOB", "exchange_rate": 9.09}
    response = client.post("/api/simulate", json=payload)
    assert response.status_code == 200
    data = response.get_json()
    assert data["currency"] == "BOB"
    assert data["exchange_rate"] == 9.09
    assert data["extra_schedule"][0]["extra"] == 250


def test_simulate_accepts_form_data(client):
    form = {key: str(value) for key, value in LOAN.items()}
    response = client.post("/api/simulate", data=form)
    assert response.status_code == 200
    assert response.get_json()["baseline"]["payoff_months"] == 360


def test_simulate_rejects_invalid_amount(client):
    response = client.post("/api/simulate", json={**LOAN, "principal": "lots"})
    assert response.status_code == 400
    assert "Invalid amount" in response.get_json()["error"]


def test_simulate_rejects_unknown_currency(client):
    response = client.post("/api/simulate", json={**LOAN, "currency": "EUR"})
    assert response.status_code == 400


def test_required_extra(client):
    response = client.post("/api/required-extra", json={**LOAN, "target_months": 240})
    assert response.status_code == 200
    data = response.get_json()
    assert data["no_extra_needed"] is False
    assert data["monthly_extra"] > 0
    assert data["result"]["payoff_months"] <= 240


def test_required_extra_rejects_zero_target(client):
    response = client.post("/api/required-extra", json={**LOAN, "target_months": 0})
    assert response.status_code == 400


def test_simulate_rejects_oversized_term(client):
    response = client.post("/api/simulate", json={**LOAN, "term": 1e7})
    assert response.status_code == 400
    assert "must not exceed" in response.get_json()["error"]


def test_simulate_rejects_unknown_term_unit(client):
    response = client.post("/api/simulate", json={**LOAN, "term_unit": "decades"})
    assert response.status_code == 400
    assert "Term unit" in response.get_json()["error"]


def test_simulate_term_unit_is_case_insensitive(client):
    response = client.post("/api/simulate", json={**LOAN, "term_unit": "Years"})
    assert response.status_code == 200
    assert response.get_json()["baseline"]["payoff_months"] == 360


@pytest.mark.parametrize("flag", ["0", "false", "", "no"])
def test_full_schedule_flag_off_values_keep_preview(client, flag):
    form = {key: str(value) for key, value in LOAN.items()}
    form["full_schedule"] = flag
    response = client.post("/api/simulate", data=form)
    data = response.get_json()
    assert len(data["baseline_schedule"]) == 120
    assert data["truncated"] == 240


def test_full_schedule_flag_accepts_form_true(client):
    form = {key: str(value) for key, value in LOAN.items()}
    form["full_schedule"] = "1"
    response = client.post("/api/simulate", data=form)
    assert len(response.get_json()["baseline_schedule"]) == 360
