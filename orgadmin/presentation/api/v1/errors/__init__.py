"""HTTP error rendering.

Exports:
    ErrorHandler: DomainError/unknown error -> logged, sanitized response
    ErrorResponse: Status code plus envelope
    RequestContext: Request details attached to log entries
    register_exception_handlers: Wire ErrorHandler into a FastAPI app
"""

from orgadmin.presentation.api.v1.errors.error_handler import (
    ErrorHandler,
    ErrorResponse,
    RequestContext,
)
from orgadmin.presentation.api.v1.errors.error_response import (
    ErrorBody,
    ErrorEnvelope,
    FieldErrorDetail,
)
from orgadmin.presentation.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)

__all__ = [
    "ErrorBody",
    "ErrorEnvelope",
    "ErrorHandler",
    "ErrorResponse",
    "FieldErrorDetail",
    "RequestContext",
    "register_exception_handlers",
]
