"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance with its own Hub. The hub is created here, once, and hung on
app.state; sessions and the health route reach it through the get_hub
dependency rather than a module global.

Route order matters: the API and WebSocket routes are registered before
the optional static mount at "/", which would otherwise shadow them.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from pointsync import __version__
from pointsync.api import api_router
from pointsync.config import Settings, settings as default_settings
from pointsync.hub.state import Hub
from pointsync.realtime.origin import OriginCheck, OriginPolicy
from pointsync.realtime.websocket import points_websocket

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. The hub needs no teardown: process exit ends every session.
    """
    cfg: Settings = app.state.settings
    logger.info(
        "pointsync.starting",
        version=__version__,
        environment=cfg.environment,
        ws_path=cfg.ws_path,
        origins=repr(app.state.origin_policy),
        start_time=app.state.hub.start_time,
    )

    yield

    logger.info(
        "pointsync.shutdown",
        points=len(app.state.hub.points),
        connections=len(app.state.hub.connections),
    )


def create_app(
    settings: Optional[Settings] = None,
    hub: Optional[Hub] = None,
    origin_policy: Optional[OriginCheck] = None,
) -> FastAPI:
    """Build and return the FastAPI application."""
    cfg = settings or default_settings

    app = FastAPI(
        title="pointsync",
        description="Real-time shared 3-D point collection over WebSockets",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.hub = hub or Hub(key_precision=cfg.key_precision)
    app.state.origin_policy = origin_policy or OriginPolicy(cfg.allowed_origins)

    # Mount API routes
    app.include_router(api_router)

    # Mount WebSocket route
    app.add_api_websocket_route(cfg.ws_path, points_websocket, name="points")

    # Client app last, so it never shadows the routes above
    if cfg.static_dir:
        app.mount("/", StaticFiles(directory=cfg.static_dir, html=True), name="static")

    return app


# Default app instance (used by uvicorn: pointsync.main:app)
app = create_app()
