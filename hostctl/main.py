"""FastAPI application entry-point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from hostctl import __version__
from hostctl.routers import health, scripts, system, ws
from hostctl.services.dispatcher import command_dispatcher
from hostctl.utils.logging import get_logger, setup_logging

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown hooks."""
    setup_logging()
    yield
    if command_dispatcher.pending:
        log.info("app.dispatches_in_flight", count=command_dispatcher.pending)


app = FastAPI(
    title="hostctl",
    description="Cross-platform script execution and power control service",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(scripts.router)
app.include_router(system.router)
app.include_router(ws.router)
