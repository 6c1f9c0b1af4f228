"""Integration tests for API endpoints"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def create_debt(client: TestClient, user_id: str = "user_1", **overrides) -> dict:
    body = {
        "user_id": user_id,
        "name": "Credit Card",
        "balance": 1200.0,
        "apr": 0.0,
        "minimum_payment": 100.0,
        "payment_day": 15,
    }
    body.update(overrides)
    response = client.post("/v1/debts", json=body)
    assert response.status_code == 201
    return response.json()


def test_health_endpoint(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "budget_forecast_total" in response.text


def test_request_id_header_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_create_and_list_debts(client: TestClient):
    created = create_debt(client, name="Card", balance=900.0, minimum_payment=45.0)
    create_debt(client, name="Loan", balance=3000.0, apr=7.5, minimum_payment=120.0)

    assert created["debt_id"]
    response = client.get("/v1/debts?user_id=user_1")

    assert response.status_code == 200
    data = response.json()
    assert [d["name"] for d in data["debts"]] == ["Card", "Loan"]
    assert data["total_balance"] == 3900.0
    assert data["total_minimum_payments"] == 165.0


def test_create_debt_rejects_negative_balance(client: TestClient):
    response = client.post(
        "/v1/debts",
        json={"user_id": "user_1", "name": "Bad", "balance": -5, "apr": 10, "minimum_payment": 10},
    )
    assert response.status_code == 422


def test_forecast_inline_debts(client: TestClient):
    """1200 at 0% with 100/month: paid off in 12 months"""
    response = client.post(
        "/v1/forecast",
        json={
            "debts": [{"name": "Card", "balance": 1200, "apr": 0, "minimum_payment": 100}],
            "start_date": "2025-01-15",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["payoff_status"] == "paid_off"
    assert data["months_to_payoff"] == 12
    assert data["projected_payoff_date"] == "2026-01-15"
    assert data["payoff_month"] == "2026-01"
    assert data["duration_years"] == 1
    assert data["duration_months"] == 0
    assert data["total_interest_paid"] == 0
    assert data["interest_saved"] is None


def test_forecast_stored_debts_with_extra_payment(client: TestClient):
    create_debt(client, name="Card", balance=5000.0, apr=22.0, minimum_payment=150.0)
    create_debt(client, name="Car", balance=8000.0, apr=6.0, minimum_payment=200.0)

    response = client.post(
        "/v1/forecast",
        json={"user_id": "user_1", "extra_payment": 250, "strategy": "avalanche"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["converged"] is True
    assert data["interest_saved"] > 0
    assert data["months_saved"] > 0
    assert data["total_interest_paid"] == round(data["total_interest_paid"], 2)
    assert len(data["balance_history"]) == data["months_to_payoff"]
    assert [m["label"] for m in data["payoff_order"]][0] == "Card"


def test_forecast_non_convergent_is_undetermined(client: TestClient):
    response = client.post(
        "/v1/forecast",
        json={
            "debts": [{"balance": 10000, "apr": 24, "minimum_payment": 100}],
            "month_cap": 120,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["converged"] is False
    assert data["payoff_status"] == "undetermined"
    assert data["months_to_payoff"] == 120
    assert data["projected_payoff_date"] is None
    assert data["payoff_month"] is None
    assert data["duration_years"] is None


def test_forecast_requires_debts_or_user(client: TestClient):
    response = client.post("/v1/forecast", json={"extra_payment": 100})
    assert response.status_code == 422


def test_forecast_rejects_cap_above_maximum(client: TestClient):
    response = client.post("/v1/forecast", json={"debts": [], "month_cap": 5000})
    assert response.status_code == 422


def test_forecast_rejects_negative_extra_payment(client: TestClient):
    response = client.post("/v1/forecast", json={"debts": [], "extra_payment": -10})
    assert response.status_code == 422


def test_forecast_empty_debts(client: TestClient):
    response = client.post("/v1/forecast", json={"debts": [], "start_date": "2025-06-01"})

    assert response.status_code == 200
    data = response.json()
    assert data["months_to_payoff"] == 0
    assert data["total_interest_paid"] == 0
    assert data["payoff_month"] == "2025-06"


def test_debt_priority_endpoint(client: TestClient):
    create_debt(client, name="A", balance=1000.0, apr=20.0, minimum_payment=100.0)
    create_debt(client, name="B", balance=4000.0, apr=10.0, minimum_payment=80.0)

    response = client.get("/v1/debts/priority?user_id=user_1&method=avalanche")

    assert response.status_code == 200
    data = response.json()
    assert [(d["name"], d["score"], d["band"]) for d in data["debts"]] == [("A", 10, "high"), ("B", 5, "medium")]
    assert data["estimated_months"] == 28  # ceil(5000 / 180)


def test_debt_priority_unknown_method(client: TestClient):
    response = client.get("/v1/debts/priority?user_id=user_1&method=random")
    assert response.status_code == 422


@patch("budget_gateway.infrastructure.clients.notifications.NotificationClient.send_debt_alert", new_callable=AsyncMock)
def test_risk_check_creates_alert_once(mock_notify: AsyncMock, client: TestClient):
    """High ratio raises one alert and email; a repeat check inside the cooldown does not"""
    create_debt(client, name="Loan", balance=20000.0, apr=8.0, minimum_payment=900.0)

    first = client.post(
        "/v1/risk/check",
        json={"user_id": "user_1", "monthly_income": 2000, "email": "user@example.com"},
    )
    second = client.post(
        "/v1/risk/check",
        json={"user_id": "user_1", "monthly_income": 2000, "email": "user@example.com"},
    )

    assert first.status_code == 200
    assert first.json()["risk_level"] == "high"
    assert first.json()["debt_to_income_ratio"] == 45.0
    assert first.json()["alert_created"] is True
    assert second.json()["alert_created"] is False
    assert mock_notify.await_count == 1


def test_risk_check_low_ratio(client: TestClient):
    create_debt(client, minimum_payment=100.0)

    response = client.post("/v1/risk/check", json={"user_id": "user_1", "monthly_income": 4000})

    assert response.status_code == 200
    assert response.json()["risk_level"] == "none"
    assert response.json()["alert_created"] is False


def test_risk_check_without_income(client: TestClient):
    response = client.post("/v1/risk/check", json={"user_id": "user_1", "monthly_income": 0})
    assert response.status_code == 422


def test_list_and_acknowledge_alerts(client: TestClient):
    create_debt(client, minimum_payment=380.0)
    check = client.post("/v1/risk/check", json={"user_id": "user_1", "monthly_income": 1000})
    alert_id = check.json()["alert_id"]

    alerts = client.get("/v1/risk/alerts?user_id=user_1&unacknowledged=true").json()["alerts"]
    assert [a["alert_id"] for a in alerts] == [alert_id]
    assert alerts[0]["risk_level"] == "medium"

    ack = client.post(f"/v1/risk/alerts/{alert_id}/acknowledge?user_id=user_1")
    assert ack.status_code == 200
    assert ack.json()["acknowledged"] is True

    remaining = client.get("/v1/risk/alerts?user_id=user_1&unacknowledged=true").json()["alerts"]
    assert remaining == []


def test_acknowledge_unknown_alert(client: TestClient):
    response = client.post("/v1/risk/alerts/00000000-0000-0000-0000-000000000000/acknowledge?user_id=user_1")
    assert response.status_code == 404

    response = client.post("/v1/risk/alerts/not-a-uuid/acknowledge?user_id=user_1")
    assert response.status_code == 400


def test_create_and_get_proposal(client: TestClient):
    create_debt(client, name="Card", balance=2500.0, apr=24.0, minimum_payment=75.0)
    create_debt(client, name="Loan", balance=6000.0, apr=5.0, minimum_payment=150.0)

    created = client.post(
        "/v1/proposal",
        json={"user_id": "user_1", "cash_flow": 900, "monthly_savings": 300},
    )

    assert created.status_code == 201
    data = created.json()
    assert data["surplus"] == 600.0
    assert [a["amount"] for a in data["allocations"]] == [300.0, 180.0, 120.0]
    assert data["allocations"][0]["name"] == "Card"
    assert data["converged"] is True
    assert data["interest_saved"] > 0

    fetched = client.get(f"/v1/proposal/{data['proposal_id']}")
    assert fetched.status_code == 200
    assert fetched.json()["months_to_payoff"] == data["months_to_payoff"]


def test_get_proposal_not_found(client: TestClient):
    assert client.get("/v1/proposal/00000000-0000-0000-0000-000000000000").status_code == 404
    assert client.get("/v1/proposal/bad-id").status_code == 400


def test_generate_payments_is_idempotent(client: TestClient):
    create_debt(client, name="Card", payment_day=31)
    create_debt(client, name="Installment", is_installment=True, installment_amount=50.0,
                start_date="2025-03-01", end_date="2025-04-30")

    first = client.post("/v1/payments/generate", json={"user_id": "user_1", "today": "2025-03-15"})
    second = client.post("/v1/payments/generate", json={"user_id": "user_1", "today": "2025-03-15"})

    assert first.status_code == 200
    assert first.json()["generated"] == 12  # 10 months for Card + March/April installments
    assert first.json()["debts_processed"] == 2
    assert second.json()["generated"] == 0
    assert second.json()["skipped"] == 12


def test_generate_payments_without_debts(client: TestClient):
    response = client.post("/v1/payments/generate", json={})

    assert response.status_code == 200
    assert response.json()["generated"] == 0
    assert response.json()["message"] == "No active debts to process"


def test_proposal_projection_targets_proposed_debt(client: TestClient):
    """The stored projection pays the proposed highest-APR debt, not the smallest balance"""
    create_debt(client, name="Small Loan", balance=500.0, apr=3.0, minimum_payment=25.0)
    create_debt(client, name="Card", balance=6000.0, apr=24.0, minimum_payment=150.0)

    proposal = client.post(
        "/v1/proposal",
        json={"user_id": "user_1", "cash_flow": 900, "monthly_savings": 300, "strategy": "snowball"},
    ).json()
    avalanche = client.post(
        "/v1/forecast",
        json={"user_id": "user_1", "extra_payment": 300, "strategy": "avalanche"},
    ).json()
    snowball = client.post(
        "/v1/forecast",
        json={"user_id": "user_1", "extra_payment": 300, "strategy": "snowball"},
    ).json()

    assert proposal["allocations"][0]["name"] == "Card"
    assert proposal["strategy"] == "avalanche"
    assert proposal["total_interest_paid"] == avalanche["total_interest_paid"]
    assert proposal["months_to_payoff"] == avalanche["months_to_payoff"]
    assert proposal["total_interest_paid"] != snowball["total_interest_paid"]


def test_debt_recommendations_endpoint(client: TestClient):
    create_debt(client, name="Card", balance=2500.0, apr=24.0, minimum_payment=75.0)
    create_debt(client, name="Loan", balance=6000.0, apr=5.0, minimum_payment=150.0)

    response = client.get("/v1/debts/recommendations?user_id=user_1&extra_payment=100")

    assert response.status_code == 200
    data = response.json()
    assert [r["kind"] for r in data["recommendations"]] == ["extra_payment", "focus_order", "consolidate"]
    assert data["recommendations"][1]["message"] == "Focus on Card first, then move to Loan."


def test_debt_recommendations_without_debts(client: TestClient):
    response = client.get("/v1/debts/recommendations?user_id=nobody")

    assert response.status_code == 200
    assert [r["kind"] for r in response.json()["recommendations"]] == ["debt_free"]
