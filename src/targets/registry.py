"""Target registry — the fixed, ordered list of monitored servers.

Resolved once at startup from settings. Every other component keys its
state by ``Target.id``, so ids must be unique.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.config import Settings

logger = logging.getLogger(__name__)


class DuplicateTargetError(ValueError):
    """Raised when two targets share the same id."""


# ── Data model ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Target:
    """A remote endpoint being monitored."""

    id: str
    name: str
    url: str


# ── Registry ─────────────────────────────────────────────────────────────────


class TargetRegistry:
    """Immutable, ordered collection of targets."""

    def __init__(self, targets: Sequence[Target]) -> None:
        seen: set[str] = set()
        for t in targets:
            if t.id in seen:
                raise DuplicateTargetError(f"Target '{t.id}' is registered more than once")
            seen.add(t.id)
        self._targets: tuple[Target, ...] = tuple(targets)

    @classmethod
    def from_settings(cls, settings: Settings) -> TargetRegistry:
        """Build the default server list, honouring per-target URL overrides."""
        registry = cls([
            Target(id="mainServer", name="Main Server", url=settings.main_server_url),
            Target(id="proxyServer", name="Proxy Server", url=settings.proxy_server_url),
            Target(id="socketServer", name="Socket Server", url=settings.socket_server_url),
        ])
        logger.info("Target registry loaded: %d targets", len(registry))
        return registry

    @property
    def targets(self) -> tuple[Target, ...]:
        return self._targets

    def get(self, target_id: str) -> Target | None:
        return next((t for t in self._targets if t.id == target_id), None)

    def ids(self) -> list[str]:
        return [t.id for t in self._targets]

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)
