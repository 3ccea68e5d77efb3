"""FastAPI server for the ping-pong monitor."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import router
from src.config import settings
from src.health.aggregator import Aggregator
from src.health.report import print_report
from src.health.scheduler import HealthScheduler
from src.health.store import HealthRecordStore
from src.targets.registry import TargetRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Wire registry → store → aggregator → scheduler and start pinging."""
    registry = TargetRegistry.from_settings(settings)
    app.state.registry = registry

    store = HealthRecordStore(registry)
    app.state.health_store = store

    aggregator = Aggregator(store, on_cycle_complete=print_report)
    scheduler = HealthScheduler(
        aggregator,
        registry.targets,
        interval=settings.ping_interval_seconds,
        overlap_policy=settings.overlap_policy,
    )
    app.state.scheduler = scheduler

    logger.info("Performing initial ping...")
    await scheduler.start()

    yield

    # Shutdown
    logger.info("Shutting down gracefully")
    await scheduler.stop()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Ping-Pong Monitor",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


app = create_app()
