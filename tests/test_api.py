"""Tests for the FastAPI routes."""

from __future__ import annotations

import re

import pytest
from fastapi.testclient import TestClient

from src.api.routes import format_uptime, memory_usage
from src.api.server import create_app
from src.config import settings
from src.health.engine import ProbeFailure, ProbeSuccess
from src.health.scheduler import SchedulerState
from src.health.store import HealthRecordStore

_MB_RE = re.compile(r"^\d+ MB$")


@pytest.fixture
def client(store: HealthRecordStore) -> TestClient:
    """App without lifespan: store wired by hand, no scheduler running."""
    app = create_app()
    app.state.health_store = store
    return TestClient(app)


class TestRoot:
    def test_active(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "active"
        assert data["message"] == "Ping-Pong server is running"
        assert "T" in data["lastPing"]
        assert list(data["pingResults"]) == ["mainServer", "proxyServer", "socketServer"]

    def test_reflects_store(self, client: TestClient, store: HealthRecordStore) -> None:
        store.apply(ProbeSuccess(target_id="mainServer", response_time_ms=50, status_code=200), resource_usage="12 MB")
        store.apply(ProbeFailure(target_id="proxyServer", error="timed out"))

        results = client.get("/").json()["pingResults"]
        assert results["mainServer"]["status"] == "Success"
        assert results["mainServer"]["responseTime"] == 50
        assert results["mainServer"]["resourceUsage"] == "12 MB"
        assert results["mainServer"]["uptime"] == "100%"
        assert results["proxyServer"]["status"] == "Failed"
        assert results["proxyServer"]["error"] == "timed out"


class TestPing:
    def test_before_first_cycle(self, client: TestClient) -> None:
        resp = client.get("/ping")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "success"
        assert body["message"] == "Ping-Pong Server is active"
        results = body["data"]["pingResults"]
        assert all(r["status"] == "Unknown" for r in results.values())
        assert all(r["lastPing"] is None for r in results.values())

    def test_process_stats(self, client: TestClient) -> None:
        data = client.get("/ping").json()["data"]
        assert re.match(r"^\d+ minutes, \d+ seconds$", data["uptime"])
        assert set(data["memoryUsage"]) == {"rss", "heapTotal", "heapUsed"}
        assert all(_MB_RE.match(v) for v in data["memoryUsage"].values())
        assert "T" in data["serverTime"]


class TestHelpers:
    def test_format_uptime(self) -> None:
        assert format_uptime(0) == "0 minutes, 0 seconds"
        assert format_uptime(125.9) == "2 minutes, 5 seconds"
        assert format_uptime(3600) == "60 minutes, 0 seconds"

    def test_memory_usage(self) -> None:
        usage = memory_usage()
        assert all(_MB_RE.match(v) for v in usage.values())


class TestLifespan:
    def test_scheduler_runs_with_app(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Port 9 (discard) on loopback: probes fail fast without leaving the host
        for name in ("main_server_url", "proxy_server_url", "socket_server_url"):
            monkeypatch.setattr(settings, name, "http://127.0.0.1:9/ping")
        monkeypatch.setattr(settings, "ping_interval_seconds", 60.0)

        app = create_app()
        with TestClient(app) as client:
            assert app.state.scheduler.state == SchedulerState.RUNNING
            results = client.get("/ping").json()["data"]["pingResults"]
            assert set(results) == {"mainServer", "proxyServer", "socketServer"}
            assert all(r["status"] in ("Unknown", "Failed") for r in results.values())
        assert app.state.scheduler.state == SchedulerState.IDLE
