"""tracewalk FastAPI application."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracewalk.config import TracewalkConfig
from tracewalk.errors import register_error_handlers
from tracewalk.server.routes.health import router as health_router
from tracewalk.server.routes.spans import router as spans_router
from tracewalk.store import create_store


def create_app(config: TracewalkConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    config = config or TracewalkConfig()
    store = create_store(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.connect()
        yield
        await store.close()

    app = FastAPI(
        title="tracewalk",
        description="Bounded span-tree reconstruction over flat span indexes",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store and config for route access
    app.state.config = config
    app.state.store = store

    # CORS — allow local dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # API routes
    app.include_router(spans_router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    return app
