"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..app import Application
from ..logging_config import get_logger
from .routes import health, messaging

logger = get_logger(__name__)


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="Smart Delivery Chatbot API",
        description="Intent-based chat replies for delivery and payment questions",
        version="0.1.0",
        lifespan=lifespan,
    )

    @fastapi_app.exception_handler(Exception)
    async def handle_unhandled_exception(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled exception: {exc}",
            extra={"context": {"path": request.url.path}},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error"},
        )

    fastapi_app.include_router(messaging.create_messaging_router(application))
    fastapi_app.include_router(health.create_health_router(application))

    return fastapi_app
