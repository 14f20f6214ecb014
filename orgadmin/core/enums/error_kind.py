"""Domain error kinds (the discriminant of DomainError).

Every DomainError carries exactly one ErrorKind. The kind alone determines
the HTTP status and the machine-readable code sent to clients, so the two
can never disagree.

Kinds:
- VALIDATION: Input failed field validation (400)
- BAD_REQUEST: Request rejected by an upstream service (400)
- AUTH: Missing or expired credentials (401)
- FORBIDDEN: Insufficient permissions (403)
- NOT_FOUND: Resource does not exist (404)
- CONFLICT: Duplicate resource or state conflict (409)
- INTERNAL: Server-side or upstream outage (500)
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Domain error kinds."""

    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        """HTTP status code for this kind."""
        return _HTTP_STATUS[self]

    @property
    def code(self) -> str:
        """Client-facing error code for this kind."""
        return _CODES[self]


_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.AUTH: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

_CODES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "VALIDATION_ERROR",
    ErrorKind.BAD_REQUEST: "BAD_REQUEST",
    ErrorKind.AUTH: "UNAUTHORIZED",
    ErrorKind.FORBIDDEN: "FORBIDDEN",
    ErrorKind.NOT_FOUND: "NOT_FOUND",
    ErrorKind.CONFLICT: "CONFLICT",
    ErrorKind.INTERNAL: "INTERNAL_ERROR",
}
