"""Cycle aggregator — probes every target concurrently and folds results into the store.

A cycle only finishes once every target has an outcome. Each target's
record is updated independently, then the cycle-complete callback (the
console report) receives the full snapshot.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any

import httpx

from src.health.engine import ProbeOutcome, ProbeSuccess, make_client, probe
from src.health.store import HealthRecord, HealthRecordStore
from src.health.usage import NOT_AVAILABLE, extract_resource_usage
from src.targets.registry import Target

logger = logging.getLogger(__name__)


class Aggregator:
    """Runs probe cycles against a HealthRecordStore."""

    def __init__(
        self,
        store: HealthRecordStore,
        client_factory: Callable[[], httpx.AsyncClient] = make_client,
        on_cycle_complete: Callable[[dict[str, HealthRecord]], Any] | None = None,
    ) -> None:
        self.store = store
        self.client_factory = client_factory
        self.on_cycle_complete = on_cycle_complete  # console report callback
        self.cycles_completed = 0

    async def run_cycle(self, targets: Iterable[Target]) -> list[ProbeOutcome]:
        """Probe all targets at once, wait for every outcome, update the store."""
        targets = list(targets)
        logger.info("Starting server pings (%d targets)", len(targets))

        async with self.client_factory() as client:
            outcomes = await asyncio.gather(*(probe(t, client) for t in targets))

        for outcome in outcomes:
            self._apply(outcome)

        self.cycles_completed += 1
        ok = sum(1 for o in outcomes if isinstance(o, ProbeSuccess))
        logger.info(
            "Ping cycle #%d complete: %d/%d targets up",
            self.cycles_completed, ok, len(outcomes),
        )

        if self.on_cycle_complete:
            try:
                self.on_cycle_complete(self.store.snapshot())
            except Exception:
                logger.exception("Cycle report callback error")

        return list(outcomes)

    def _apply(self, outcome: ProbeOutcome) -> None:
        if isinstance(outcome, ProbeSuccess):
            try:
                usage = extract_resource_usage(outcome.body)
            except Exception:
                logger.debug("Resource usage extraction failed for %s", outcome.target_id, exc_info=True)
                usage = NOT_AVAILABLE
            record = self.store.apply(outcome, resource_usage=usage)
            logger.debug(
                "Ping %s: %s (%dms, %s)",
                outcome.target_id, record.status.value, record.response_time_ms, record.resource_usage,
            )
        else:
            self.store.apply(outcome)
            logger.warning("Ping %s failed: %s", outcome.target_id, outcome.error)
