"""Probe engine — a single HTTP GET per target, converted into a typed outcome.

The prober never touches shared state and never raises: network errors,
timeouts and HTTP error statuses all come back as a ProbeFailure.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import httpx

from src.targets.registry import Target

logger = logging.getLogger(__name__)


# ── Models ───────────────────────────────────────────────────────────────────


class Status(str, Enum):
    UNKNOWN = "Unknown"
    SUCCESS = "Success"
    FAILED = "Failed"


@dataclass(frozen=True)
class ProbeSuccess:
    """Target answered with a non-error HTTP response."""

    target_id: str
    response_time_ms: int
    status_code: int
    body: str = ""


@dataclass(frozen=True)
class ProbeFailure:
    """Target could not be reached or answered with an error status."""

    target_id: str
    error: str


ProbeOutcome = ProbeSuccess | ProbeFailure


# ── Prober ───────────────────────────────────────────────────────────────────


def make_client() -> httpx.AsyncClient:
    """AsyncClient used for probing: follows redirects, transport default timeout."""
    return httpx.AsyncClient(follow_redirects=True)


def _describe_error(exc: Exception) -> str:
    # Some httpx exceptions (e.g. ReadTimeout) carry an empty message
    return str(exc) or type(exc).__name__


async def probe(
    target: Target,
    client: httpx.AsyncClient | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> ProbeOutcome:
    """GET ``target.url`` once and report latency or the failure reason.

    No retry and no timeout override: the transport default applies.
    Redirects are followed; the final response must be 2xx. When ``client``
    is omitted a short-lived client is created for this call.
    """
    t0 = clock()
    try:
        if client is None:
            async with make_client() as own_client:
                resp = await own_client.get(target.url)
        else:
            resp = await client.get(target.url)
        latency = (clock() - t0) * 1000
        resp.raise_for_status()
    except httpx.HTTPError as e:
        logger.debug("Probe %s failed: %s", target.id, e)
        return ProbeFailure(target_id=target.id, error=_describe_error(e))
    except Exception as e:
        logger.debug("Probe %s raised unexpectedly", target.id, exc_info=True)
        return ProbeFailure(target_id=target.id, error=f"{type(e).__name__}: {e}")

    return ProbeSuccess(
        target_id=target.id,
        response_time_ms=max(0, round(latency)),
        status_code=resp.status_code,
        body=resp.text,
    )
