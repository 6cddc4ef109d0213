"""
Integration tests for the assembled application.

Runs the real lifespan: sample holdings, simulated quotes, scheduler wiring.
"""

import pytest
from fastapi.testclient import TestClient

from portfolio_dashboard.api.dependencies.rate_limit import limiter
from portfolio_dashboard.main import create_app


@pytest.fixture
def client():
    limiter.enabled = False
    with TestClient(create_app()) as client:
        yield client
    limiter.enabled = True


class TestApplication:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "Portfolio Dashboard API"

    def test_startup_publishes_sample_portfolio(self, client):
        response = client.get("/api/portfolio")

        assert response.status_code == 200
        data = response.json()
        assert len(data["stocks"]) == 10
        assert data["total_investment"] == 1_455_000
        assert data["live_quote_count"] == 10
        assert sum(s["portfolio_percentage"] for s in data["stocks"]) == pytest.approx(100)

    def test_health_after_startup(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["portfolio"]["ready"] is True

    def test_manual_refresh(self, client):
        before = client.get("/api/portfolio/scheduler").json()["refresh_count"]

        response = client.post("/api/portfolio/refresh")

        assert response.status_code == 200
        after = client.get("/api/portfolio/scheduler").json()["refresh_count"]
        assert after == before + 1

    def test_stop_and_restart_auto_refresh(self, client):
        stopped = client.post("/api/portfolio/scheduler/stop").json()
        assert stopped["state"] == "idle"

        started = client.post(
            "/api/portfolio/scheduler/start", json={"interval_ms": 60000}
        ).json()
        assert started["state"] == "scheduled"
        assert started["interval_ms"] == 60000
