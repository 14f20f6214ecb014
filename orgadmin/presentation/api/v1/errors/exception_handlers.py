"""Global exception handlers for the FastAPI application.

DomainError and every other unhandled exception are routed through one
ErrorHandler so logging and response shape stay identical for both.

Exports:
    register_exception_handlers: Register handlers with a FastAPI app
"""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from orgadmin.core.errors import DomainError
from orgadmin.presentation.api.v1.errors.error_handler import (
    ErrorHandler,
    RequestContext,
)


def build_exception_handler(
    handler: ErrorHandler,
) -> Callable[[Request, Exception], Awaitable[JSONResponse]]:
    """Adapt ErrorHandler to Starlette's exception handler signature.

    Args:
        handler: ErrorHandler that logs and renders the error.

    Returns:
        Async callable returning the JSON error response.
    """

    async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
        rendered = handler.handle(
            exc,
            RequestContext(path=request.url.path, method=request.method),
        )
        return JSONResponse(
            status_code=rendered.status_code,
            content=jsonable_encoder(rendered.body.to_content()),
        )

    return exception_handler


def register_exception_handlers(app: FastAPI, handler: ErrorHandler) -> None:
    """Register all exception handlers with the application.

    Args:
        app: FastAPI application instance.
        handler: ErrorHandler shared by all registrations.

    Example:
        >>> app = FastAPI()
        >>> register_exception_handlers(app, ErrorHandler(logger=get_logger()))
    """
    exception_handler = build_exception_handler(handler)
    app.add_exception_handler(DomainError, exception_handler)
    app.add_exception_handler(Exception, exception_handler)
