from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from cyber_arena.api.routes.admin_analytics import router as admin_analytics_router
from cyber_arena.api.routes.health import router as health_router
from cyber_arena.api.routes.leaderboard import router as leaderboard_router
from cyber_arena.api.routes.training import router as training_router
from cyber_arena.core.config import get_settings
from cyber_arena.core.logging import configure_logging
from cyber_arena.game.leaderboard.notifier import leaderboard_notifier
from cyber_arena.services.leaderboard_broadcast import build_redis_broadcaster

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    broadcaster = None
    if settings.leaderboard_redis_broadcast_enabled:
        broadcaster = build_redis_broadcaster(
            redis_url=settings.redis_url,
            channel_prefix=settings.leaderboard_redis_channel_prefix,
            socket_timeout_seconds=settings.leaderboard_redis_socket_timeout_seconds,
        )
        broadcaster.attach(leaderboard_notifier)
        logger.info(
            "leaderboard_broadcast_attached",
            channel_prefix=settings.leaderboard_redis_channel_prefix,
        )
    try:
        yield
    finally:
        await leaderboard_notifier.drain()
        if broadcaster is not None:
            await broadcaster.close()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Cyber Awareness Arena API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.include_router(health_router)
    app.include_router(training_router)
    app.include_router(leaderboard_router)
    app.include_router(admin_analytics_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "cyber_arena.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
