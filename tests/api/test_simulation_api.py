from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from loan_payoff.api.app import app
from loan_payoff.engine import amortization


@pytest.fixture
def client():
    return TestClient(app)


def _payload(**overrides):
    payload = {
        "principal": 100000,
        "term_years": 25,
        "monthly_payment": 1000,
        "rates": [4.64, 4.29, 3.94],
    }
    payload.update(overrides)
    return payload


class TestSimulateEndpoint:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_paid_off(self, client):
        resp = client.post("/api/v1/simulate", json=_payload())
        assert resp.status_code == 200
        data = resp.json()
        assert data["outcome"] == "paid_off"
        assert data["paid_off"] is True
        assert len(data["schedule"]) == data["months"]
        assert data["schedule"][0]["month"] == 1
        assert Decimal(data["schedule"][0]["annual_rate"]) == Decimal("0.0464")
        assert data["formatted"]["payoff_time"].endswith("months")
        assert data["formatted"]["initial_minimum_payment"].startswith("£")

    def test_yearly_rollup(self, client):
        data = client.post("/api/v1/simulate", json=_payload()).json()
        assert data["yearly"][0]["year"] == 1
        assert len(data["yearly"]) == (data["months"] + 11) // 12

    def test_cap_notice(self, client):
        data = client.post("/api/v1/simulate", json=_payload(monthly_payment=3000)).json()
        assert data["cap_exceeded"] is True
        assert any("overpayment cap" in n for n in data["notices"])

    def test_no_notices_at_minimum(self, client):
        data = client.post("/api/v1/simulate", json=_payload(monthly_payment=10)).json()
        assert data["cap_exceeded"] is False
        assert data["notices"] == []
        assert data["months"] == 300
        assert Decimal(data["total_overpayments"]) == 0

    def test_infeasible_payment(self, client, monkeypatch):
        """A minimum below the month's interest makes the run infeasible."""
        monkeypatch.setattr(amortization, "minimum_payment", lambda p, r, n: p * r / 2)
        resp = client.post(
            "/api/v1/simulate",
            json=_payload(principal=100000, monthly_payment=10, rates=[12]),
        )
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["month"] == 1
        assert Decimal(detail["interest"]) == Decimal("1000")
        assert Decimal(detail["shortfall"]) == Decimal("500")
        assert Decimal(detail["initial_minimum_payment"]) == Decimal("500")
        assert detail["message"] == (
            "Payment of £500.00 is not enough to cover interest of £1,000.00 in month 1."
        )

    @pytest.mark.parametrize("overrides", [
        {"principal": 0},
        {"term_years": 0},
        {"term_years": 101},
        {"monthly_payment": -1},
        {"rates": []},
        {"rates": [4.5, -1]},
    ])
    def test_invalid_request(self, client, overrides):
        resp = client.post("/api/v1/simulate", json=_payload(**overrides))
        assert resp.status_code == 422
