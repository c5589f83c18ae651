"""Shared pytest fixtures."""

from __future__ import annotations

import os

# Force settings to use test-safe defaults before any import
os.environ.setdefault("HOSTCTL_API_KEY", "")
os.environ.setdefault("HOSTCTL_LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient

from tests.fakes import FakeDispatcher, RecordingSink


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def fake_dispatcher():
    return FakeDispatcher()


@pytest.fixture
def patched_shutdown(fake_dispatcher, monkeypatch):
    """Swap the router-level orchestrators for one that never powers off."""
    from hostctl.services.shutdown import ShutdownOrchestrator
    from hostctl.utils.platform import Platform

    orchestrator = ShutdownOrchestrator(fake_dispatcher, platform=Platform.macos)

    import hostctl.routers.system as rsys
    import hostctl.routers.ws as rws

    monkeypatch.setattr(rsys, "shutdown_orchestrator", orchestrator)
    monkeypatch.setattr(rws, "shutdown_orchestrator", orchestrator)
    return orchestrator


@pytest.fixture
async def client(patched_shutdown):
    """Async test client; shutdown requests hit the fake dispatcher."""
    from hostctl.main import app as fastapi_app

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo structlog configuration installed by app startup in earlier tests."""
    import structlog

    yield
    structlog.reset_defaults()
