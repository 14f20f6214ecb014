"""Raw failure shape received from the identity service.

Keycloak errors reach us in several shapes: an ``httpx.HTTPStatusError``
with a JSON body, an exception carrying a ``status_code`` attribute, or a
plain mapping (``{"status": ..., "body": {...}}`` or the flat
``{"statusCode": ..., "message": ...}``). ExternalServiceFailure normalises
all of them into one optional-field record so the mapper never probes
attributes ad hoc.

Message precedence (first non-empty wins):
    body.error_message -> body.error_description -> body.error -> message
"""

import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from orgadmin.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class FailureBody:
    """Error body returned by the identity service.

    Attributes:
        error: OAuth-style short error (``error``).
        error_message: Keycloak admin API message (``errorMessage``).
        error_description: OAuth-style description (``error_description``).
        raw: Full decoded body, kept for diagnostics.
    """

    error: str | None = None
    error_message: str | None = None
    error_description: str | None = None
    raw: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "FailureBody":
        """Build from a decoded JSON payload (non-mappings keep only ``raw``)."""
        if not isinstance(payload, Mapping):
            return cls(raw=payload)
        return cls(
            error=_as_text(payload.get("error")),
            error_message=_as_text(payload.get("errorMessage")),
            error_description=_as_text(payload.get("error_description")),
            raw=dict(payload),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalServiceFailure:
    """Normalised identity-service failure.

    Attributes:
        status: HTTP status of the nested response, if any.
        body: Decoded error body of the nested response, if any.
        status_code: Flat status code carried by the error itself.
        message: Error's own message.
        stack: Formatted traceback, if the failure was raised.
    """

    status: int | None = None
    body: FailureBody | None = None
    status_code: int | None = None
    message: str | None = None
    stack: str | None = None

    @property
    def effective_status(self) -> int | None:
        """Nested response status, else flat status code."""
        return self.status if self.status is not None else self.status_code

    def extract_message(self) -> str | None:
        """First non-empty message by documented precedence."""
        if self.body is not None:
            for candidate in (
                self.body.error_message,
                self.body.error_description,
                self.body.error,
            ):
                if candidate:
                    return candidate
        return self.message or None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExternalServiceFailure":
        """Normalise a raised error.

        Handles ``httpx.HTTPStatusError``, DomainError (status from its kind)
        and any exception exposing ``response.status_code`` /
        ``response.status`` or ``status_code``.
        """
        stack = None
        if exc.__traceback__ is not None:
            stack = "".join(traceback.format_exception(exc))

        if isinstance(exc, DomainError):
            return cls(status=exc.http_status, message=exc.message, stack=stack)

        response = getattr(exc, "response", None)
        body: FailureBody | None = None

        if isinstance(exc, httpx.HTTPStatusError):
            body = _decode_body(exc.response)
        elif response is not None:
            payload = getattr(response, "data", None)
            if payload is not None:
                body = FailureBody.from_payload(payload)

        return cls(
            status=_response_status(exc),
            body=body,
            status_code=_as_int(getattr(exc, "status_code", None)),
            message=str(exc) or None,
            stack=stack,
        )

    @staticmethod
    def status_of(exc: BaseException) -> int | None:
        """Effective status of a raised error without building the record."""
        status = _response_status(exc)
        if status is not None:
            return status
        return _as_int(getattr(exc, "status_code", None))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExternalServiceFailure":
        """Normalise a raw mapping in the nested or flat shape."""
        response = data.get("response")
        status = data.get("status")
        body_payload = data.get("body")
        if isinstance(response, Mapping):
            status = response.get("status", status)
            body_payload = response.get("data", body_payload)

        return cls(
            status=_as_int(status),
            body=FailureBody.from_payload(body_payload) if body_payload is not None else None,
            status_code=_as_int(data.get("statusCode", data.get("status_code"))),
            message=_as_text(data.get("message")),
            stack=_as_text(data.get("stack")),
        )

    @classmethod
    def coerce(
        cls, failure: "ExternalServiceFailure | BaseException | Mapping[str, Any]"
    ) -> "ExternalServiceFailure":
        """Accept any supported failure shape."""
        if isinstance(failure, ExternalServiceFailure):
            return failure
        if isinstance(failure, BaseException):
            return cls.from_exception(failure)
        return cls.from_mapping(failure)


def _response_status(exc: BaseException) -> int | None:
    if isinstance(exc, DomainError):
        return exc.http_status
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    response = getattr(exc, "response", None)
    if response is None:
        return None
    status = getattr(response, "status_code", None)
    if status is None:
        status = getattr(response, "status", None)
    return _as_int(status)


def _decode_body(response: httpx.Response) -> FailureBody | None:
    if not response.content:
        return None
    try:
        return FailureBody.from_payload(response.json())
    except ValueError:
        # Non-JSON error page; keep the text for the log entry.
        return FailureBody(raw=response.text)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
