"""Map identity-service failures onto the domain error taxonomy.

The mapping is total: every failure produces exactly one DomainError, and
the raw failure is logged before any translation so diagnostic context
survives even when the client only sees a sanitized message.

Status mapping:
    400 -> BAD_REQUEST
    401 -> AUTH
    403 -> FORBIDDEN
    404 -> NOT_FOUND
    409 -> CONFLICT
    422 -> VALIDATION (message only; the service has no field granularity)
    500, 502, 503, 504 -> INTERNAL ("<service> service error: <message>")
    anything else, including no status -> INTERNAL (message verbatim)

A DomainError raised inside an operation keeps its kind, message and field
errors.
"""

from collections.abc import Mapping
from typing import Any

from orgadmin.core.errors import DomainError
from orgadmin.domain.protocols.logger_protocol import LoggerProtocol
from orgadmin.infrastructure.identity.external_failure import ExternalServiceFailure

SERVER_ERROR_STATUSES = frozenset({500, 502, 503, 504})


class ExternalErrorMapper:
    """Convert identity-service failures into DomainErrors.

    Attributes:
        service_name: Human-readable service name used in messages.

    Example:
        >>> mapper = ExternalErrorMapper(logger=logger)
        >>> try:
        ...     await keycloak.create_user(representation)
        ... except httpx.HTTPStatusError as e:
        ...     raise mapper.map(e) from e
    """

    def __init__(self, *, logger: LoggerProtocol, service_name: str = "Keycloak") -> None:
        self._logger = logger
        self.service_name = service_name

    def map(
        self, failure: ExternalServiceFailure | BaseException | Mapping[str, Any]
    ) -> DomainError:
        """Translate one failure.

        Args:
            failure: Normalised failure, raised exception or raw mapping.

        Returns:
            DomainError of the kind selected by the failure's HTTP status.
        """
        normalised = ExternalServiceFailure.coerce(failure)
        status = normalised.effective_status
        message = normalised.extract_message() or f"{self.service_name} operation failed"

        self._logger.error(
            "identity_service_error",
            service=self.service_name,
            status=status,
            message=message,
            body=normalised.body.raw if normalised.body is not None else None,
            stack=normalised.stack,
        )

        if isinstance(failure, DomainError):
            return DomainError(
                kind=failure.kind,
                message=failure.message,
                field_errors=failure.field_errors,
            )

        match status:
            case 400:
                return DomainError.bad_request(message)
            case 401:
                return DomainError.auth(message)
            case 403:
                return DomainError.forbidden(message)
            case 404:
                return DomainError.not_found(message)
            case 409:
                return DomainError.conflict(message)
            case 422:
                return DomainError.validation(message)
            case _ if status in SERVER_ERROR_STATUSES:
                return DomainError.internal(f"{self.service_name} service error: {message}")
            case _:
                return DomainError.internal(message)
