"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from credit_desk.api.main import create_app
from credit_desk.api.dependencies import get_today
from credit_desk.domain.models import LatePayment


# Fixed "today" so delinquency results don't depend on the wall clock
TODAY = date(2024, 3, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a pinned business date"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def late_payments() -> list[LatePayment]:
    """Late list as fetched from the data service: 2, 5, 7, 29 and 45 days overdue"""
    return [
        LatePayment(
            client_id=str(i),
            client_name=name,
            oldest_due_date=date.fromordinal(TODAY.toordinal() - days),
            total_pending=100.0 * (i + 1),
        )
        for i, (name, days) in enumerate(
            [("Ana", 2), ("Bruno", 5), ("Carla", 7), ("Davi", 29), ("Elisa", 45)]
        )
    ]
