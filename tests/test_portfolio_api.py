"""
Unit tests for Portfolio API endpoints.

Tests snapshot reads, filtering/sorting, performers, manual refresh and
auto-refresh control, including error mapping.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_dashboard.api.dependencies.portfolio_deps import get_refresh_scheduler
from portfolio_dashboard.api.dependencies.rate_limit import limiter
from portfolio_dashboard.api.error_handlers import register_exception_handlers
from portfolio_dashboard.api.portfolio import router
from portfolio_dashboard.core.exceptions import (
    NotInitializedError,
    SourceUnavailableError,
    ValidationError,
)
from portfolio_dashboard.models.portfolio import PortfolioSnapshot
from portfolio_dashboard.services.holdings import SpreadsheetHoldingsSource
from portfolio_dashboard.services.portfolio_pipeline import AggregationPipeline
from portfolio_dashboard.services.refresh_scheduler import RefreshScheduler

from conftest import FIXED_TIME, FakeQuoteSource, found, make_holding


def make_snapshot() -> PortfolioSnapshot:
    """A: +20%, B: -10%, C: no quote. Technology and Banks both hold 300."""
    holdings = [
        make_holding("A", investment=100, quantity=10, sector="Technology", holding_id="1"),
        make_holding("B", investment=300, quantity=10, sector="Banks", holding_id="2"),
        make_holding("C", investment=200, quantity=10, sector="Technology", holding_id="3"),
    ]
    quotes = {"A": found("A", 12.0), "B": found("B", 27.0)}
    total = sum(h.investment for h in holdings)
    stocks = tuple(
        AggregationPipeline.enrich(h, quotes.get(h.symbol), total, FIXED_TIME)
        for h in holdings
    )
    present_value = sum(s.present_value for s in stocks)
    return PortfolioSnapshot(
        stocks=stocks,
        sectors=AggregationPipeline.build_sectors(stocks, total),
        total_investment=total,
        total_present_value=present_value,
        total_gain_loss=present_value - total,
        total_gain_loss_percentage=(present_value - total) / total * 100,
        last_updated=FIXED_TIME,
    )


# ===== Fixtures =====


@pytest.fixture
def snapshot():
    return make_snapshot()


@pytest.fixture
def mock_scheduler(snapshot):
    """Mock RefreshScheduler serving a fixed snapshot."""
    scheduler = Mock()
    scheduler.get_snapshot = Mock(return_value=snapshot)
    scheduler.refresh_now = AsyncMock(return_value=snapshot)
    scheduler.start = Mock()
    scheduler.stop = Mock()
    scheduler.status = Mock(
        return_value={
            "state": "scheduled",
            "interval_ms": 15000,
            "ready": True,
            "in_flight": False,
            "refresh_count": 1,
            "failure_count": 0,
            "last_success_at": FIXED_TIME.isoformat(),
            "last_failure_at": None,
            "last_error": None,
        }
    )
    return scheduler


@pytest.fixture
def client(mock_scheduler):
    """Create test client with mocked scheduler and rate limits off."""
    app = FastAPI()
    app.state.limiter = limiter
    register_exception_handlers(app)
    app.include_router(router)

    app.dependency_overrides[get_refresh_scheduler] = lambda: mock_scheduler

    limiter.enabled = False
    yield TestClient(app)
    limiter.enabled = True


# ===== GET /api/portfolio =====


class TestGetPortfolio:
    """Test full snapshot endpoint"""

    def test_returns_snapshot(self, client):
        response = client.get("/api/portfolio")

        assert response.status_code == 200
        data = response.json()
        assert data["total_investment"] == 600
        assert data["total_present_value"] == 590
        assert data["total_gain_loss"] == -10
        assert data["live_quote_count"] == 2
        assert data["fallback_quote_count"] == 1
        assert [s["symbol"] for s in data["stocks"]] == ["A", "B", "C"]
        assert data["stocks"][2]["price_source"] == "fallback"
        assert data["sectors"][0]["stock_count"] == 2

    def test_not_initialized_returns_503(self, client, mock_scheduler):
        mock_scheduler.get_snapshot.side_effect = NotInitializedError("not yet")

        response = client.get("/api/portfolio")

        assert response.status_code == 503
        assert response.json() == {"detail": "not yet", "error_type": "not_initialized"}


# ===== GET /api/portfolio/stocks =====


class TestGetStocks:
    """Test stock table endpoint"""

    def test_source_order_by_default(self, client):
        response = client.get("/api/portfolio/stocks")

        assert [s["symbol"] for s in response.json()] == ["A", "B", "C"]

    def test_sector_filter(self, client):
        response = client.get("/api/portfolio/stocks", params={"sector": "Technology"})

        assert [s["symbol"] for s in response.json()] == ["A", "C"]

    def test_sector_filter_is_case_sensitive(self, client):
        response = client.get("/api/portfolio/stocks", params={"sector": "technology"})

        assert response.json() == []

    def test_sort_by_gain_loss_ascending(self, client):
        response = client.get(
            "/api/portfolio/stocks", params={"sort_by": "gain_loss", "order": "asc"}
        )

        assert [s["symbol"] for s in response.json()] == ["B", "C", "A"]

    def test_sort_by_investment_descending(self, client):
        response = client.get("/api/portfolio/stocks", params={"sort_by": "investment"})

        assert [s["symbol"] for s in response.json()] == ["B", "C", "A"]

    def test_invalid_sort_field(self, client):
        response = client.get("/api/portfolio/stocks", params={"sort_by": "symbol; drop"})

        assert response.status_code == 422


# ===== Sectors and performers =====


class TestGetSectors:
    """Test sector endpoints"""

    def test_sectors_in_snapshot_order(self, client):
        response = client.get("/api/portfolio/sectors")

        data = response.json()
        assert [s["name"] for s in data] == ["Technology", "Banks"]
        assert data[0]["total_investment"] == 300
        assert data[0]["portfolio_percentage"] == 50.0

    def test_get_sector_by_name(self, client):
        response = client.get("/api/portfolio/sectors/Banks")

        assert response.status_code == 200
        assert response.json()["total_gain_loss"] == -30

    def test_unknown_sector(self, client):
        response = client.get("/api/portfolio/sectors/Pharma")

        assert response.status_code == 404


class TestGetPerformers:
    """Test performers endpoint"""

    def test_performers(self, client):
        response = client.get("/api/portfolio/performers")

        data = response.json()
        assert [s["symbol"] for s in data["top_performers"]] == ["A", "C", "B"]
        assert [s["symbol"] for s in data["worst_performers"]] == ["B", "C", "A"]
        assert [s["name"] for s in data["best_sectors"]] == ["Technology"]
        assert [s["name"] for s in data["worst_sectors"]] == ["Banks"]

    def test_limit(self, client):
        response = client.get("/api/portfolio/performers", params={"limit": 1})

        data = response.json()
        assert [s["symbol"] for s in data["top_performers"]] == ["A"]
        assert [s["symbol"] for s in data["worst_performers"]] == ["B"]

    def test_limit_out_of_range(self, client):
        response = client.get("/api/portfolio/performers", params={"limit": 0})

        assert response.status_code == 422


# ===== POST /api/portfolio/refresh =====


class TestRefresh:
    """Test manual refresh endpoint"""

    def test_refresh_returns_new_snapshot(self, client, mock_scheduler):
        response = client.post("/api/portfolio/refresh")

        assert response.status_code == 200
        assert response.json()["total_investment"] == 600
        mock_scheduler.refresh_now.assert_awaited_once()

    def test_source_unavailable_returns_503(self, client, mock_scheduler):
        mock_scheduler.refresh_now.side_effect = SourceUnavailableError(
            "Holdings file not found",
            source="spreadsheet",
            file_path="/data/portfolio.xlsx",
            path="/data/portfolio.xlsx",
            row="3",
        )

        response = client.post("/api/portfolio/refresh")

        assert response.status_code == 503
        assert response.json()["error_type"] == "source_unavailable"


# ===== Scheduler control =====


class TestSchedulerControl:
    """Test auto-refresh control endpoints"""

    def test_get_status(self, client):
        response = client.get("/api/portfolio/scheduler")

        assert response.status_code == 200
        assert response.json()["state"] == "scheduled"
        assert response.json()["interval_ms"] == 15000

    def test_start_with_interval(self, client, mock_scheduler):
        response = client.post(
            "/api/portfolio/scheduler/start", json={"interval_ms": 5000}
        )

        assert response.status_code == 200
        mock_scheduler.start.assert_called_once_with(5000)

    def test_start_without_body_uses_default(self, client, mock_scheduler):
        response = client.post("/api/portfolio/scheduler/start")

        assert response.status_code == 200
        mock_scheduler.start.assert_called_once_with(None)

    def test_start_rejects_non_positive_interval(self, client, mock_scheduler):
        response = client.post("/api/portfolio/scheduler/start", json={"interval_ms": 0})

        assert response.status_code == 422
        mock_scheduler.start.assert_not_called()

    def test_start_validation_error_maps_to_400(self, client, mock_scheduler):
        mock_scheduler.start.side_effect = ValidationError("bad interval")

        response = client.post("/api/portfolio/scheduler/start", json={"interval_ms": 10})

        assert response.status_code == 400
        assert response.json()["error_type"] == "validation_error"

    def test_stop(self, client, mock_scheduler):
        mock_scheduler.status.return_value = {
            **mock_scheduler.status.return_value,
            "state": "idle",
            "interval_ms": None,
        }

        response = client.post("/api/portfolio/scheduler/stop")

        assert response.status_code == 200
        assert response.json()["state"] == "idle"
        mock_scheduler.stop.assert_called_once()


# ===== Spreadsheet-backed refresh =====


class TestSpreadsheetRefresh:
    """Test refresh errors raised by a real spreadsheet source"""

    @pytest.fixture
    def spreadsheet_client(self, tmp_path, settings):
        source = SpreadsheetHoldingsSource(tmp_path / "missing.xlsx")
        pipeline = AggregationPipeline(FakeQuoteSource(), settings=settings)
        scheduler = RefreshScheduler(source, pipeline, settings=settings)

        app = FastAPI()
        app.state.limiter = limiter
        register_exception_handlers(app)
        app.include_router(router)
        app.dependency_overrides[get_refresh_scheduler] = lambda: scheduler

        limiter.enabled = False
        yield TestClient(app)
        limiter.enabled = True

    def test_missing_workbook_returns_503(self, spreadsheet_client):
        response = spreadsheet_client.post("/api/portfolio/refresh")

        assert response.status_code == 503
        assert response.json() == {
            "detail": "Holdings file not found",
            "error_type": "source_unavailable",
        }

    def test_snapshot_stays_uninitialized_after_failure(self, spreadsheet_client):
        spreadsheet_client.post("/api/portfolio/refresh")

        response = spreadsheet_client.get("/api/portfolio")

        assert response.status_code == 503
        assert response.json()["error_type"] == "not_initialized"

    def test_failure_recorded_in_scheduler_status(self, spreadsheet_client):
        spreadsheet_client.post("/api/portfolio/refresh")

        response = spreadsheet_client.get("/api/portfolio/scheduler")

        assert response.json()["failure_count"] == 1
        assert response.json()["last_error"] == "Holdings file not found"
