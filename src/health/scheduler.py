"""Ping scheduler — one cycle at startup, then one every fixed interval.

Intervals are measured from the previous trigger's start, not its end, so a
slow cycle does not drift the schedule. In-flight cycles are tracked as
tasks; the overlap policy decides whether a trigger that fires while a
cycle is still running starts another one ("allow") or is dropped ("skip").
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from enum import Enum
from typing import Literal

from src.health.aggregator import Aggregator
from src.targets.registry import Target

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 300.0  # 5 minutes

OverlapPolicy = Literal["allow", "skip"]


class SchedulerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class HealthScheduler:
    """Drives Aggregator.run_cycle on a fixed-rate timer.

    Lifecycle:
        scheduler = HealthScheduler(aggregator, registry.targets)
        await scheduler.start()
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        aggregator: Aggregator,
        targets: Sequence[Target],
        interval: float = DEFAULT_INTERVAL,
        overlap_policy: OverlapPolicy = "allow",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        if overlap_policy not in ("allow", "skip"):
            raise ValueError(f"Unknown overlap policy: {overlap_policy}")
        self.aggregator = aggregator
        self.targets = tuple(targets)
        self.interval = interval
        self.overlap_policy = overlap_policy
        self.state = SchedulerState.IDLE
        self.triggers = 0
        self.skipped = 0
        self._task: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()

    # -- public API ------------------------------------------------------------

    @property
    def is_cycle_running(self) -> bool:
        return bool(self._inflight)

    async def start(self) -> None:
        """Enter RUNNING and trigger the first cycle immediately."""
        if self.state == SchedulerState.RUNNING:
            return
        self.state = SchedulerState.RUNNING
        self._task = asyncio.create_task(self._schedule_loop(), name="ping-scheduler")
        logger.info(
            "Ping scheduler started: %d targets every %.0fs (overlap=%s)",
            len(self.targets), self.interval, self.overlap_policy,
        )

    async def stop(self) -> None:
        """Cancel the timer and any in-flight cycles."""
        self.state = SchedulerState.IDLE
        tasks = list(self._inflight)
        if self._task:
            tasks.append(self._task)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._inflight.clear()
        self._task = None
        logger.info("Ping scheduler stopped")

    async def run_now(self) -> None:
        """Run one cycle immediately and wait for it (manual trigger)."""
        await self._run_cycle()

    # -- internals -------------------------------------------------------------

    async def _schedule_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_start = loop.time()
        while self.state == SchedulerState.RUNNING:
            self._trigger()
            next_start += self.interval
            await asyncio.sleep(max(0.0, next_start - loop.time()))

    def _trigger(self) -> asyncio.Task[None] | None:
        self.triggers += 1
        if self.overlap_policy == "skip" and self._inflight:
            self.skipped += 1
            logger.warning("Previous ping cycle still running, skipping trigger #%d", self.triggers)
            return None

        if self.triggers > 1:
            logger.info("Scheduled ping task running (trigger #%d)", self.triggers)
        task = asyncio.create_task(self._run_cycle(), name=f"ping-cycle-{self.triggers}")
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _run_cycle(self) -> None:
        try:
            await self.aggregator.run_cycle(self.targets)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Ping cycle error")
