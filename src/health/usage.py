"""Resource-usage extraction from a probe's response body.

Targets may report their own load under ``data`` in their JSON body. Each
extractor either returns a display string or ``None``; the first hit wins
and anything else (including malformed payloads) falls back to "N/A".
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

NOT_AVAILABLE = "N/A"

Extractor = Callable[[dict[str, Any]], str | None]


def _decode(payload: Any) -> Any:
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except (ValueError, RecursionError):
            return None
    return payload


def _data_section(payload: Any) -> dict[str, Any] | None:
    body = _decode(payload)
    if not isinstance(body, dict):
        return None
    data = body.get("data")
    return data if isinstance(data, dict) else None


def extract_connections(data: dict[str, Any]) -> str | None:
    """``data.socketConnections`` → "<n> connections"."""
    count = data.get("socketConnections")
    if count is None or isinstance(count, (dict, list)):
        return None
    return f"{count} connections"


def extract_heap_used(data: dict[str, Any]) -> str | None:
    """``data.memoryUsage.heapUsed``, verbatim."""
    memory = data.get("memoryUsage")
    if not isinstance(memory, dict):
        return None
    heap_used = memory.get("heapUsed")
    if heap_used is None or isinstance(heap_used, (dict, list)):
        return None
    return str(heap_used)


EXTRACTORS: tuple[Extractor, ...] = (extract_connections, extract_heap_used)


def extract_resource_usage(payload: Any) -> str:
    """Run the extractor chain over a response body. Never raises."""
    data = _data_section(payload)
    if data is None:
        return NOT_AVAILABLE
    for extractor in EXTRACTORS:
        value = extractor(data)
        if value is not None:
            return value
    return NOT_AVAILABLE
