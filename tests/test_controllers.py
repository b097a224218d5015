"""
HTTP tests for the FastAPI routes.
"""

import inspect

import pytest
from fastapi.testclient import TestClient

from twelvecp.controllers import (
    TwelveCPController,
    get_historical_peak_service,
    get_notification_service,
    get_twelve_cp_analyzer
)
from twelvecp.main import create_app
from twelvecp.services import HistoricalPeakService

from conftest import FakeObservationRepository


@pytest.fixture
def repository(shaped_frame):
    return FakeObservationRepository(shaped_frame)


@pytest.fixture
def client(repository, make_analyzer, notifier):
    app = create_app()
    analyzer = make_analyzer(repository)
    app.dependency_overrides[get_twelve_cp_analyzer] = lambda: analyzer
    app.dependency_overrides[get_notification_service] = lambda: notifier
    app.dependency_overrides[get_historical_peak_service] = lambda: HistoricalPeakService(
        FakeObservationRepository(), notifier)
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_lists_endpoints(client):
    response = client.get("/api/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"


def test_nothing_cached_before_analysis(client):
    assert client.get("/api/12cp/savings-data").status_code == 404
    assert client.get("/api/12cp/simulate", params={"facility_mw": 10}).status_code == 409


def test_analyze_then_simulate(client):
    response = client.post("/api/12cp/analyze")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["notification"]["severity"] == "success"
    assert body["data"]["high_risk_hours"] == [18, 17]

    cached = client.get("/api/12cp/savings-data").json()
    assert cached["annual_avg_price"] == 60.0

    simulation = client.get(
        "/api/12cp/simulate",
        params={"facility_mw": 10, "annual_operating_hours": 8760, "strategy": "partial"}
    )
    assert simulation.status_code == 200
    assert simulation.json()["savings"]["amount"] == 528174.0
    assert simulation.json()["with_strategy"]["hours_avoided"] == 6


def test_analyze_without_data(client, repository):
    repository.frame = repository.frame.iloc[0:0]
    response = client.post("/api/12cp/analyze")
    assert response.status_code == 200
    assert response.json()["status"] == "no_data"
    assert response.json()["data"] is None


def test_analyze_store_failure(client, repository):
    client.post("/api/12cp/analyze")
    repository.error = ConnectionError("connection refused")

    response = client.post("/api/12cp/analyze")

    assert response.status_code == 502
    assert response.json()["detail"] == "connection refused"
    assert client.get("/api/12cp/savings-data").status_code == 200


@pytest.mark.parametrize("params", [
    {"facility_mw": -1},
    {"facility_mw": 10, "annual_operating_hours": 9000},
    {"facility_mw": 10, "strategy": "aggressive"},
    {},
])
def test_simulate_rejects_bad_parameters(client, params):
    assert client.get("/api/12cp/simulate", params=params).status_code == 422


def test_analyze_rejects_bad_lookback(client):
    assert client.post("/api/12cp/analyze", params={"lookback_months": 0}).status_code == 422


def test_transmission_adder(client):
    response = client.get("/api/12cp/transmission-adder")
    assert response.json() == {"transmission_adder": 11.73, "unit": "$/MW per hour"}


def test_historical_peaks_without_data(client):
    assert client.get("/api/12cp/historical-peaks").status_code == 404
    assert client.get("/api/12cp/historical-peaks", params={"years": 3}).status_code == 400


def test_notifications_newest_first(client):
    client.post("/api/12cp/analyze")
    client.get("/api/12cp/historical-peaks")

    feed = client.get("/api/notifications", params={"limit": 5}).json()

    assert feed["count"] == 2
    assert feed["notifications"][0]["title"] == "No Historical Data"
    assert feed["notifications"][1]["title"] == "12CP Analysis Complete"


def test_data_summary(client):
    response = client.get("/api/12cp/data-summary")
    assert response.status_code == 200
    body = response.json()
    assert body["total_records"] == 744
    assert body["priced_records"] == 744
    assert body["demand_records"] == 0
    assert body["first_timestamp"] == "2024-01-01 00:00:00"
    assert body["latest_timestamp"] == "2024-01-31 23:00:00"


def test_data_summary_store_failure(client, repository):
    repository.error = ConnectionError("database is locked")
    response = client.get("/api/12cp/data-summary")
    assert response.status_code == 500
    assert "database is locked" in response.json()["detail"]


@pytest.mark.parametrize("path", [
    "/12cp/analyze",
    "/12cp/simulate",
    "/12cp/historical-peaks",
    "/12cp/data-summary",
])
def test_store_backed_routes_are_sync(path):
    endpoints = {route.path: route.endpoint for route in TwelveCPController().router.routes}
    assert not inspect.iscoroutinefunction(endpoints[path])
