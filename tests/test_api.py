"""Tests for the API endpoints."""

import inspect
from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api import routes
from src.api.app import create_app
from src.calculators.cache import ResultCache
from src.calculators.summary import SummaryCalculator
from src.engine import TaxEngine


@pytest.fixture
def app() -> FastAPI:
    """Create the app with an engine attached but no lifespan."""
    test_app = create_app()
    test_app.state.engine = TaxEngine(SummaryCalculator(cache=ResultCache(capacity=10)))
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    """GET /health returns ok status and cache stats."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["cache"]["size"] == 0
    assert data["cache"]["capacity"] == 10
    assert "keys" not in data["cache"]


def test_calculate(client: TestClient) -> None:
    """POST /calculate returns the full summary."""
    response = client.post(
        "/calculate",
        json={"gross_amount": 5000, "dependents": 2, "service_tax_rate": 5, "include_service_tax": True},
    )
    assert response.status_code == 200
    data = response.json()
    assert Decimal(str(data["net_amount"])) == Decimal("3577.28")
    assert Decimal(str(data["total_tax"])) == Decimal("1422.72")
    assert Decimal(str(data["contribution"]["amount"])) == Decimal("1000.00")
    assert Decimal(str(data["income_tax"]["dependents_deduction"])) == Decimal("379.18")
    assert data["service_tax"]["included"] is True


def test_calculate_defaults(client: TestClient) -> None:
    """Only gross_amount is required."""
    response = client.post("/calculate", json={"gross_amount": "2000"})
    assert response.status_code == 200
    data = response.json()
    assert Decimal(str(data["income_tax"]["amount"])) == 0
    assert data["dependents"] == 0


def test_calculate_invalid_gross(client: TestClient) -> None:
    """A failed range check is reported with the offending field."""
    response = client.post("/calculate", json={"gross_amount": 0})
    assert response.status_code == 422
    data = response.json()
    assert data["field"] == "gross_amount"
    assert "greater than zero" in data["error"]


def test_calculate_too_many_dependents(client: TestClient) -> None:
    response = client.post("/calculate", json={"gross_amount": 5000, "dependents": 25})
    assert response.status_code == 422
    assert response.json()["field"] == "dependents"


def test_calculate_missing_gross(client: TestClient) -> None:
    """POST /calculate without gross_amount returns 422."""
    response = client.post("/calculate", json={})
    assert response.status_code == 422


def test_gross_from_net(client: TestClient) -> None:
    response = client.post(
        "/calculate/gross-from-net",
        json={"target_net_amount": "3577.28", "dependents": 2},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["converged"] is True
    assert data["warning"] is None
    assert abs(Decimal(str(data["gross_amount_found"])) - Decimal("5000")) <= Decimal("0.02")
    assert abs(Decimal(str(data["net_difference"]))) <= Decimal("0.01")


def test_gross_from_net_not_converged(client: TestClient) -> None:
    response = client.post(
        "/calculate/gross-from-net",
        json={"target_net_amount": "3577.28", "dependents": 2, "max_iterations": 1},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["converged"] is False
    assert data["warning"]


def test_gross_from_net_invalid(client: TestClient) -> None:
    response = client.post("/calculate/gross-from-net", json={"target_net_amount": -5})
    assert response.status_code == 422
    assert response.json()["field"] == "target_net_amount"


def test_validate(client: TestClient) -> None:
    """POST /validate checks only the submitted fields."""
    response = client.post("/validate", json={"gross_amount": "abc", "dependents": 3})
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"gross_amount", "dependents"}
    assert data["gross_amount"]["valid"] is False
    assert data["dependents"] == {"valid": True, "message": ""}


def test_clear_cache(client: TestClient) -> None:
    client.post("/calculate", json={"gross_amount": 5000})
    assert client.get("/health").json()["cache"]["size"] == 1
    response = client.delete("/cache")
    assert response.status_code == 200
    assert client.get("/health").json()["cache"]["size"] == 0


def test_lifespan_builds_engine() -> None:
    """Running the app with its lifespan attaches an engine."""
    with TestClient(create_app()) as client:
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_solver_routes_run_in_threadpool() -> None:
    """CPU-bound calculation routes are sync so they do not block the event loop."""
    assert not inspect.iscoroutinefunction(routes.calculate)
    assert not inspect.iscoroutinefunction(routes.gross_from_net)
