"""
Main FastAPI application entry point.

Builds the application and wires the global error handling: every error
raised by a route is logged once and rendered as the structured error
envelope by ErrorHandler.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from orgadmin.core.config import settings
from orgadmin.core.container import get_database, get_logger
from orgadmin.presentation.api.v1.errors import (
    ErrorHandler,
    register_exception_handlers,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: release the connection pool on shutdown."""
    yield
    if get_database.cache_info().currsize:
        await get_database().close()


def create_app() -> FastAPI:
    """Create the FastAPI application.

    Returns:
        FastAPI: Configured application with exception handlers registered.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Organisation administration backend",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    register_exception_handlers(app, ErrorHandler(logger=get_logger()))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "healthy"}

    return app


app = create_app()
