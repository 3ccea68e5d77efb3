"""Status routes for the ping-pong server.

Endpoints:
  GET /      — liveness + full pingResults snapshot
  GET /ping  — server time, process uptime, memory usage + pingResults
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any

import psutil
from fastapi import APIRouter, Request

logger = logging.getLogger(__name__)

router = APIRouter()

_MB = 1024 * 1024


def format_uptime(seconds: float) -> str:
    """Process uptime as "<m> minutes, <s> seconds"."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes} minutes, {secs} seconds"


def _mb(n_bytes: int) -> str:
    return f"{round(n_bytes / _MB)} MB"


def memory_usage() -> dict[str, str]:
    """RSS, virtual size and unique set size of this process, in MB."""
    process = psutil.Process()
    info = process.memory_info()
    try:
        used = process.memory_full_info().uss
    except (psutil.Error, AttributeError):
        used = info.rss
    return {
        "rss": _mb(info.rss),
        "heapTotal": _mb(info.vms),
        "heapUsed": _mb(used),
    }


@router.get("/")
def root(request: Request) -> dict[str, Any]:
    """Basic health check for this server."""
    return {
        "status": "active",
        "message": "Ping-Pong server is running",
        "lastPing": datetime.now(timezone.utc).isoformat(),
        "pingResults": request.app.state.health_store.to_dict(),
    }


@router.get("/ping")
def ping(request: Request) -> dict[str, Any]:
    """Keep-alive endpoint; reports process stats alongside the ping results."""
    logger.info("Ping handler called")
    uptime = time.time() - psutil.Process().create_time()
    return {
        "status": "success",
        "message": "Ping-Pong Server is active",
        "data": {
            "serverTime": datetime.now(timezone.utc).isoformat(),
            "uptime": format_uptime(uptime),
            "memoryUsage": memory_usage(),
            "pingResults": request.app.state.health_store.to_dict(),
        },
    }
