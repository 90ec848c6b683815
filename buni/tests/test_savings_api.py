from __future__ import annotations

from datetime import timedelta

from flask.testing import FlaskClient

from buni.app import create_app
from buni.config import Settings
from buni.core.savings import SavingsProjectionEngine
from buni.domain.ledger import InMemoryDepositLedger
from buni.models import DepositRecord
from buni.tests.support import BrokenLedger, NOW


def broken_client() -> FlaskClient:
    engine = SavingsProjectionEngine(BrokenLedger(), clock=lambda: NOW)
    app = create_app(settings=Settings(LOG_LEVEL="CRITICAL"), engine=engine)
    return app.test_client()


def test_ping_returns_pong(client: FlaskClient):
    response = client.get("/api/ping")

    assert response.status_code == 200
    assert response.json == {"message": "pong"}


def test_health_reports_ledger(client: FlaskClient):
    client.post("/api/savings/deposits", json={"amount": 5, "goalId": "g1"})

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json == {"status": "ok", "ledgerAvailable": True, "deposits": 1}


def test_health_degraded_when_ledger_unavailable():
    response = broken_client().get("/api/health")

    assert response.status_code == 503
    assert response.json["status"] == "degraded"
    assert response.json["ledgerAvailable"] is False


def test_record_and_list_deposits(client: FlaskClient):
    created = client.post("/api/savings/deposits", json={"amount": 25, "goalId": "g2"})

    assert created.status_code == 201
    deposit = created.get_json()["deposit"]
    assert deposit["amount"] == 25
    assert deposit["goalId"] == "g2"
    assert deposit["date"].startswith("2023-01-10T00:00:00")

    listed = client.get("/api/savings/deposits")
    assert listed.status_code == 200
    assert listed.get_json()["deposits"] == [deposit]


def test_numeric_goal_ids_are_stored_as_strings(client: FlaskClient):
    created = client.post("/api/savings/deposits", json={"amount": 25, "goalId": 1700000000000})
    assert created.get_json()["deposit"]["goalId"] == "1700000000000"


def test_rejects_invalid_deposit(client: FlaskClient):
    response = client.post("/api/savings/deposits", json={"amount": -10, "goalId": "g1"})

    assert response.status_code == 422
    assert "detail" in response.get_json()
    assert client.get("/api/savings/deposits").get_json()["deposits"] == []


def test_ledger_failure_on_deposit_returns_503():
    response = broken_client().post("/api/savings/deposits", json={"amount": 10, "goalId": "g1"})

    assert response.status_code == 503
    assert response.get_json() == {"detail": "Deposit ledger unavailable"}


def test_timeline_from_recorded_history():
    ledger = InMemoryDepositLedger(
        [
            DepositRecord(amount=100, date=NOW - timedelta(days=9), goalId="g1"),
            DepositRecord(amount=100, date=NOW - timedelta(days=5), goalId="g1"),
            DepositRecord(amount=100, date=NOW - timedelta(days=7), goalId="other"),
        ]
    )
    engine = SavingsProjectionEngine(ledger, clock=lambda: NOW)
    app = create_app(settings=Settings(LOG_LEVEL="WARNING"), engine=engine)

    with app.test_client() as client:
        response = client.post(
            "/api/savings/timeline",
            json={"targetAmount": 500, "currentAmount": 200, "goalId": "g1"},
        )

    assert response.status_code == 200
    body = response.get_json()
    assert body["days"] == 14
    assert body["weeks"] == 2
    assert body["months"] == 1
    assert body["isAchievable"] is True
    assert body["formatted"] == "2 weeks"
    assert "Almost there" in body["message"]


def test_timeline_without_history_serializes_null_durations(client: FlaskClient):
    response = client.post(
        "/api/savings/timeline",
        json={"targetAmount": 500, "currentAmount": 100, "goalId": "g1"},
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["days"] is None
    assert body["weeks"] is None
    assert body["months"] is None
    assert body["isAchievable"] is False
    assert body["formatted"] == "No timeline available"


def test_timeline_rejects_negative_target(client: FlaskClient):
    response = client.post(
        "/api/savings/timeline",
        json={"targetAmount": -1, "currentAmount": 0, "goalId": "g1"},
    )
    assert response.status_code == 422


def test_progress_endpoint(client: FlaskClient):
    response = client.post(
        "/api/savings/progress",
        json={
            "targetAmount": 1000,
            "currentAmount": 100,
            "targetDate": (NOW + timedelta(days=90)).isoformat(),
        },
    )

    assert response.status_code == 200
    assert response.get_json() == {
        "progressPercent": 10.0,
        "remainingAmount": 900.0,
        "daysRemaining": 90,
        "monthlyContribution": 300.0,
    }


def test_boolean_amounts_are_rejected(client: FlaskClient):
    deposit = client.post("/api/savings/deposits", json={"amount": True, "goalId": "g1"})
    timeline = client.post("/api/savings/timeline", json={"targetAmount": True, "goalId": "g1"})
    progress = client.post("/api/savings/progress", json={"targetAmount": 100, "currentAmount": False})

    assert deposit.status_code == 422
    assert timeline.status_code == 422
    assert progress.status_code == 422
    assert client.get("/api/savings/deposits").get_json()["deposits"] == []
