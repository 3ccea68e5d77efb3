"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from src.health.store import HealthRecordStore
from src.targets.registry import Target, TargetRegistry

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def mock_client_factory() -> Callable[[Handler], Callable[[], httpx.AsyncClient]]:
    """Build AsyncClient factories whose requests are answered by a handler."""
    def make(handler: Handler) -> Callable[[], httpx.AsyncClient]:
        return lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
    return make


@pytest.fixture
def fake_clock() -> Callable[..., Callable[[], float]]:
    """Clocks returning the given readings in order."""
    def make(*readings: float) -> Callable[[], float]:
        it = iter(readings)
        return lambda: next(it)
    return make


@pytest.fixture
def targets() -> list[Target]:
    return [
        Target(id="mainServer", name="Main Server", url="http://main.test/ping"),
        Target(id="proxyServer", name="Proxy Server", url="http://proxy.test/ping"),
        Target(id="socketServer", name="Socket Server", url="http://socket.test/ping"),
    ]


@pytest.fixture
def registry(targets: list[Target]) -> TargetRegistry:
    return TargetRegistry(targets)


@pytest.fixture
def store(registry: TargetRegistry) -> HealthRecordStore:
    return HealthRecordStore(registry)
