"""FastAPI application."""

from fastapi import FastAPI

from engage.interface.api.errors import register_error_handlers
from engage.interface.api.routes import best_answer, comments, counters, health, likes
from engage.util.di.container import create_container, setup_di
from engage.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    app_instance = FastAPI(
        title="Engagement API",
        description="Likes, threaded comments and best answers for showcase content",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    register_routes(app_instance)

    return app_instance


def register_routes(app_instance: FastAPI) -> None:
    """Register routers and exception handlers.

    Args:
        app_instance: FastAPI application
    """
    app_instance.include_router(health.router)
    app_instance.include_router(likes.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(best_answer.router)
    app_instance.include_router(counters.router)
    register_error_handlers(app_instance)
