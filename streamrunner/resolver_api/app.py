"""Application factory for the streamrunner resolver API."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from ..resolver.registry import ProviderTable
from .routers import health, providers, resolve
from .settings import RunnerSettings
from .state import AppState


def create_app(
    settings: RunnerSettings | None = None,
    table: ProviderTable | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application."""

    resolved_settings = settings or RunnerSettings()
    app_state = AppState(settings=resolved_settings, table=table, transport=transport)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await app_state.aclose()

    app = FastAPI(title="streamrunner resolver API", version="0.1.0", lifespan=lifespan)
    app.state.app_state = app_state
    app.state.settings = app_state.settings

    for router in (health.router, providers.router, resolve.router):
        app.include_router(router)

    return app
