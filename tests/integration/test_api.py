"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "credit-desk"}


def test_request_id_header(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]

    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/loans/preview", json={"principal": 500, "frequency": "WEEKLY"})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "credit_desk_preview_total" in response.text
    assert "http_request_duration_seconds" in response.text


def test_preview_defaults(client: TestClient):
    """Test omitted rate and count fall back to 10% over 24"""
    response = client.post("/v1/loans/preview", json={"principal": 1000})

    assert response.status_code == 200
    data = response.json()
    assert data["interest_rate"] == 10.0
    assert data["installment_count"] == 24
    assert data["frequency"] == "DAILY"
    assert data["total_interest"] == pytest.approx(100)
    assert data["total_amount"] == pytest.approx(1100)
    assert data["installment_value"] == pytest.approx(45.8333, abs=1e-4)
    assert data["installments"] is None


def test_preview_with_schedule(client: TestClient):
    response = client.post(
        "/v1/loans/preview",
        json={
            "principal": 1200,
            "interest_rate": 20,
            "installment_count": 4,
            "frequency": "MONTHLY",
            "first_due_date": "2024-01-31",
        },
    )

    assert response.status_code == 200
    installments = response.json()["installments"]
    assert [inst["due_date"] for inst in installments] == [
        "2024-01-31",
        "2024-02-29",
        "2024-03-31",
        "2024-04-30",
    ]
    assert sum(inst["amount_cents"] for inst in installments) == 144000
    assert all(inst["status"] == "PENDING" for inst in installments)


def test_preview_rejects_zero_installments(client: TestClient):
    """Test zero count is a 422, not an Infinity installment"""
    response = client.post(
        "/v1/loans/preview",
        json={"principal": 1000, "interest_rate": 10, "installment_count": 0},
    )

    assert response.status_code == 422
    assert "installment_count" in response.json()["detail"]


def test_preview_rejects_negative_principal(client: TestClient):
    response = client.post("/v1/loans/preview", json={"principal": -1})
    assert response.status_code == 422


def test_preview_rejects_nan(client: TestClient):
    response = client.post(
        "/v1/loans/preview",
        content='{"principal": NaN}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422


def test_preview_rejects_overflowing_total(client: TestClient):
    """Test totals that overflow are a 422, never null totals"""
    body = {"principal": 1e308, "interest_rate": 1000, "installment_count": 1}

    response = client.post("/v1/loans/preview", json=body)
    assert response.status_code == 422

    response = client.post("/v1/loans/preview", json={**body, "first_due_date": "2024-01-01"})
    assert response.status_code == 422


def test_preview_schedule_total_too_large_for_cents(client: TestClient):
    response = client.post(
        "/v1/loans/preview",
        json={"principal": 1e300, "installment_count": 12, "first_due_date": "2024-01-01"},
    )
    assert response.status_code == 422


def test_preview_rejects_non_numeric_principal(client: TestClient):
    """Test form text that isn't a number is rejected by request validation"""
    response = client.post("/v1/loans/preview", json={"principal": "mil reais"})
    assert response.status_code == 422


def test_preview_schedule_limit(client: TestClient):
    response = client.post(
        "/v1/loans/preview",
        json={"principal": 1000, "installment_count": 1000, "first_due_date": "2024-01-01"},
    )
    assert response.status_code == 422


def _late_items():
    return [
        {"client_id": "1", "client_name": "Ana", "oldest_due_date": "2024-03-13", "total_pending": 50},
        {"client_id": "2", "client_name": "Bruno", "oldest_due_date": "2024-03-10", "total_pending": 80},
        {"client_id": "3", "client_name": "Carla", "oldest_due_date": "2024-03-08", "total_pending": 120},
        {"client_id": "4", "client_name": "Davi", "oldest_due_date": "2024-01-01", "total_pending": 900},
    ]


def test_delinquency_all(client: TestClient):
    """Test TODOS filter returns everyone, most late first, against pinned today"""
    response = client.post("/v1/delinquency", json={"items": _late_items()})

    assert response.status_code == 200
    data = response.json()
    assert data["as_of"] == "2024-03-15"
    assert data["filter_days"] == 0
    assert [item["client_name"] for item in data["items"]] == ["Davi", "Carla", "Bruno", "Ana"]
    assert [item["days_late"] for item in data["items"]] == [74, 7, 5, 2]
    assert [item["tier"] for item in data["items"]] == ["CRITICAL", "WARNING", "CURRENT", "CURRENT"]
    assert data["tier_counts"] == {"CURRENT": 2, "WARNING": 1, "CRITICAL": 1}


def test_delinquency_three_day_filter(client: TestClient):
    response = client.post("/v1/delinquency", json={"filter_days": 3, "items": _late_items()})

    data = response.json()
    assert [item["client_name"] for item in data["items"]] == ["Davi", "Carla", "Bruno"]
    # counts cover the whole list, not only matches
    assert data["tier_counts"]["CURRENT"] == 2


def test_delinquency_explicit_as_of(client: TestClient):
    response = client.post(
        "/v1/delinquency",
        json={"as_of": "2024-04-11", "filter_days": 30, "items": _late_items()},
    )

    data = response.json()
    assert data["as_of"] == "2024-04-11"
    assert [item["client_name"] for item in data["items"]] == ["Davi", "Carla", "Bruno"]
    assert [item["tier"] for item in data["items"]] == ["CRITICAL", "CRITICAL", "CRITICAL"]


def test_delinquency_future_due_date_is_current(client: TestClient):
    items = [{"client_id": "9", "client_name": "Zé", "oldest_due_date": "2024-04-01", "total_pending": 10}]
    response = client.post("/v1/delinquency", json={"items": items})

    item = response.json()["items"][0]
    assert item["days_late"] == 0
    assert item["tier"] == "CURRENT"


def test_delinquency_rejects_unknown_filter(client: TestClient):
    response = client.post("/v1/delinquency", json={"filter_days": 5, "items": _late_items()})
    assert response.status_code == 422


def test_pending_balance(client: TestClient):
    response = client.post(
        "/v1/collections/pending",
        json={
            "installments": [
                {"number": 1, "due_date": "2024-02-01", "amount_cents": 5000, "paid_cents": 5000, "status": "PAID"},
                {"number": 2, "due_date": "2024-02-08", "amount_cents": 5000, "paid_cents": 1000, "status": "PARTIAL"},
                {"number": 3, "due_date": "2024-02-15", "amount_cents": 5000},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "pending_cents": 9000,
        "oldest_due_date": "2024-02-08",
        "days_late": 36,
        "tier": "CRITICAL",
    }


def test_pending_balance_paid_off(client: TestClient):
    response = client.post(
        "/v1/collections/pending",
        json={
            "installments": [
                {"number": 1, "due_date": "2024-02-01", "amount_cents": 5000, "paid_cents": 5000, "status": "PAID"},
            ]
        },
    )

    assert response.json() == {
        "pending_cents": 0,
        "oldest_due_date": None,
        "days_late": 0,
        "tier": "CURRENT",
    }


def test_payment_amount_full(client: TestClient):
    response = client.post(
        "/v1/collections/payment-amount",
        json={"payment_type": "FULL", "pending_value": 45.83},
    )

    assert response.status_code == 200
    assert response.json() == {"payment_type": "FULL", "amount": 45.83}


def test_payment_amount_partial_requires_amount(client: TestClient):
    response = client.post(
        "/v1/collections/payment-amount",
        json={"payment_type": "PARTIAL", "pending_value": 45.83},
    )
    assert response.status_code == 422


def test_payment_amount_unknown_type(client: TestClient):
    response = client.post(
        "/v1/collections/payment-amount",
        json={"payment_type": "CASHBACK", "pending_value": 45.83, "amount": 10},
    )
    assert response.status_code == 422


def test_payment_amount_rejects_nan_pending(client: TestClient):
    response = client.post(
        "/v1/collections/payment-amount",
        content='{"payment_type": "PARTIAL", "pending_value": NaN, "amount": 1000000}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422


def test_uncaught_invalid_input_is_422():
    """Test domain validation errors escaping a route still answer 422"""
    from credit_desk.api.main import create_app
    from credit_desk.domain.exceptions import InvalidInputError

    app = create_app()

    @app.get("/v1/boom")
    def boom():
        raise InvalidInputError("installment_count must be at least 1, got 0")

    response = TestClient(app).get("/v1/boom")
    assert response.status_code == 422
    assert response.json() == {"detail": "installment_count must be at least 1, got 0"}
    assert response.headers["X-Request-ID"]
