"""Domain error taxonomy.

DomainError is the single error type produced by this service. It is a
tagged value: ``kind`` is the discriminant and fixes ``http_status`` and
``code``. Callers dispatch on ``kind`` with ``match``, never on subclasses.

DomainError inherits from Exception so it can be raised across async call
boundaries and reach the HTTP error handler unchanged.

Usage:
    from orgadmin.core.errors import DomainError, FieldError

    raise DomainError.not_found("Organisation not found")

    raise DomainError.validation(
        "Validation failed",
        field_errors=[FieldError(field="email", message="Invalid email format", value="bad")],
    )
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from orgadmin.core.enums import ErrorKind

DEFAULT_AUTH_MESSAGE = "Authentication required"
DEFAULT_FORBIDDEN_MESSAGE = "Insufficient permissions"


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldError:
    """One failing input field.

    Attributes:
        field: Name of the field that failed validation.
        message: Human-readable failure message.
        value: Raw value that was rejected (may be None).
    """

    field: str
    message: str
    value: Any = None


class DomainError(Exception):
    """Typed domain error.

    Instances are immutable: attributes are exposed as read-only properties.
    Build instances with the per-kind constructors rather than ``__init__``.

    Attributes:
        kind: Error kind (discriminant).
        http_status: HTTP status derived from kind.
        code: Client-facing error code derived from kind.
        message: Human-readable message.
        field_errors: Field-level failures (only populated for VALIDATION).
    """

    def __init__(
        self,
        *,
        kind: ErrorKind,
        message: str,
        field_errors: Iterable[FieldError] = (),
    ) -> None:
        super().__init__(message)
        self._kind = kind
        self._message = message
        self._field_errors: tuple[FieldError, ...] = tuple(field_errors)

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def http_status(self) -> int:
        return self._kind.http_status

    @property
    def code(self) -> str:
        return self._kind.code

    @property
    def message(self) -> str:
        return self._message

    @property
    def field_errors(self) -> tuple[FieldError, ...]:
        return self._field_errors

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code}: {self._message}"

    def __repr__(self) -> str:
        return f"DomainError(kind={self._kind.value!r}, message={self._message!r})"

    # ------------------------------------------------------------------
    # Per-kind constructors
    # ------------------------------------------------------------------

    @classmethod
    def validation(
        cls, message: str, field_errors: Iterable[FieldError] = ()
    ) -> "DomainError":
        """Input validation failure (400) with optional field errors."""
        return cls(kind=ErrorKind.VALIDATION, message=message, field_errors=field_errors)

    @classmethod
    def bad_request(cls, message: str) -> "DomainError":
        """Malformed or rejected request (400)."""
        return cls(kind=ErrorKind.BAD_REQUEST, message=message)

    @classmethod
    def auth(cls, message: str | None = None) -> "DomainError":
        """Authentication failure (401)."""
        return cls(kind=ErrorKind.AUTH, message=message or DEFAULT_AUTH_MESSAGE)

    @classmethod
    def forbidden(cls, message: str | None = None) -> "DomainError":
        """Authorization failure (403)."""
        return cls(
            kind=ErrorKind.FORBIDDEN, message=message or DEFAULT_FORBIDDEN_MESSAGE
        )

    @classmethod
    def not_found(cls, message: str) -> "DomainError":
        """Resource not found (404)."""
        return cls(kind=ErrorKind.NOT_FOUND, message=message)

    @classmethod
    def conflict(cls, message: str) -> "DomainError":
        """Duplicate resource or state conflict (409)."""
        return cls(kind=ErrorKind.CONFLICT, message=message)

    @classmethod
    def internal(cls, message: str) -> "DomainError":
        """Server-side failure (500)."""
        return cls(kind=ErrorKind.INTERNAL, message=message)
