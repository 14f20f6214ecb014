"""Terminal error handler.

Turns any error raised while serving a request into exactly one log entry
and exactly one structured response. Full diagnostics (stack, raw message,
error type) go to the log; the client gets a sanitized envelope.

Dispatch (by ``DomainError.kind``; anything else is "unknown"):

    kind                 level    client fields
    VALIDATION           warning  code, message, details
    NOT_FOUND            info     code, message
    AUTH / FORBIDDEN     warning  code, message
    BAD_REQUEST/CONFLICT warning  code, message
    INTERNAL             error    code, message, correlationId
    unknown              error    INTERNAL_ERROR, fixed message, correlationId
"""

import traceback
from dataclasses import dataclass
from typing import assert_never

from uuid_extensions import uuid7

from orgadmin.core.constants import UNEXPECTED_ERROR_CODE, UNEXPECTED_ERROR_MESSAGE
from orgadmin.core.enums import ErrorKind
from orgadmin.core.errors import DomainError
from orgadmin.domain.protocols.logger_protocol import LoggerProtocol
from orgadmin.presentation.api.v1.errors.error_response import (
    ErrorBody,
    ErrorEnvelope,
    FieldErrorDetail,
)

UNKNOWN_ERROR_STATUS = 500


@dataclass(frozen=True, slots=True, kw_only=True)
class RequestContext:
    """Request details attached to error logs."""

    path: str
    method: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ErrorResponse:
    """Rendered error: HTTP status plus envelope."""

    status_code: int
    body: ErrorEnvelope


class ErrorHandler:
    """Render errors for clients and log them for operators.

    Example:
        >>> handler = ErrorHandler(logger=get_logger())
        >>> response = handler.handle(
        ...     DomainError.not_found("Event not found"),
        ...     RequestContext(path="/api/events/1", method="GET"),
        ... )
        >>> response.status_code
        404
    """

    def __init__(self, *, logger: LoggerProtocol) -> None:
        self._logger = logger

    def handle(self, error: BaseException, context: RequestContext) -> ErrorResponse:
        """Log ``error`` once and build its response.

        Args:
            error: Any error raised by request handling.
            context: Path and method of the failing request.

        Returns:
            ErrorResponse with status ``error.http_status`` (500 if unknown).
        """
        correlation_id = str(uuid7())

        if not isinstance(error, DomainError):
            return self._handle_unknown(error, context, correlation_id)

        log_context = {
            "correlation_id": correlation_id,
            "path": context.path,
            "method": context.method,
            "message": error.message,
        }
        body = ErrorBody(code=error.code, message=error.message)

        match error.kind:
            case ErrorKind.VALIDATION:
                details = [
                    FieldErrorDetail(field=fe.field, message=fe.message, value=fe.value)
                    for fe in error.field_errors
                ]
                self._logger.warning(
                    "validation_error",
                    field_errors=[detail.model_dump() for detail in details],
                    **log_context,
                )
                body.details = details

            case ErrorKind.NOT_FOUND:
                self._logger.info("not_found_error", **log_context)

            case ErrorKind.AUTH:
                self._logger.warning(
                    "authentication_error", http_status=error.http_status, **log_context
                )

            case ErrorKind.FORBIDDEN:
                self._logger.warning(
                    "authorization_error", http_status=error.http_status, **log_context
                )

            case ErrorKind.BAD_REQUEST | ErrorKind.CONFLICT:
                self._logger.warning(
                    "client_error", http_status=error.http_status, **log_context
                )

            case ErrorKind.INTERNAL:
                self._logger.error(
                    "application_error",
                    http_status=error.http_status,
                    stack=_format_stack(error),
                    **log_context,
                )
                body.correlation_id = correlation_id

            case _:
                assert_never(error.kind)

        return ErrorResponse(status_code=error.http_status, body=ErrorEnvelope(error=body))

    def _handle_unknown(
        self, error: BaseException, context: RequestContext, correlation_id: str
    ) -> ErrorResponse:
        self._logger.error(
            "unexpected_error",
            correlation_id=correlation_id,
            path=context.path,
            method=context.method,
            message=str(error),
            stack=_format_stack(error),
            error_type=type(error).__name__,
        )
        return ErrorResponse(
            status_code=UNKNOWN_ERROR_STATUS,
            body=ErrorEnvelope(
                error=ErrorBody(
                    code=UNEXPECTED_ERROR_CODE,
                    message=UNEXPECTED_ERROR_MESSAGE,
                    correlation_id=correlation_id,
                )
            ),
        )


def _format_stack(error: BaseException) -> str:
    return "".join(traceback.format_exception(error))
