"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from canvas_snake.config import ServerConfig
from canvas_snake.server.routes import router
from canvas_snake.server.session_manager import SessionManager
from canvas_snake.server.websocket import ws_router


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    API routes are registered before the static mount so that ``/`` and
    any unknown path fall through to the packaged game assets.
    """
    config = config if config is not None else ServerConfig()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(
            config.game, max_sessions=config.max_sessions,
        )
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Canvas Snake", version="0.1.0", lifespan=_lifespan,
    )
    app.state.config = config
    app.include_router(router)
    app.include_router(ws_router)
    app.mount(
        "/", StaticFiles(directory=config.static_dir, html=True), name="static",
    )
    return app
