"""Utility functions and fakes for testing.

Provides:
- RecordingLogger: LoggerProtocol fake that captures every entry
- FakeCredentialManager: counts ensure_authenticated/authenticate calls
- http_status_error: build httpx.HTTPStatusError with a JSON body
- random_email: random test email
"""

import random
import string
from dataclasses import dataclass, field
from typing import Any

import httpx

KEYCLOAK_TEST_URL = "https://keycloak.test"


def random_lower_string(length: int = 32) -> str:
    """Generate a random lowercase string."""
    return "".join(random.choices(string.ascii_lowercase, k=length))


def random_email() -> str:
    """Generate a random email address for testing."""
    return f"{random_lower_string(10)}@example.com"


def http_status_error(
    status: int, payload: Any = None, *, url: str = f"{KEYCLOAK_TEST_URL}/admin/realms/test/users"
) -> httpx.HTTPStatusError:
    """Build the error httpx raises from ``raise_for_status()``.

    Args:
        status: HTTP status code.
        payload: Optional JSON body.
        url: Request URL.
    """
    request = httpx.Request("GET", url)
    response = httpx.Response(status, json=payload, request=request)
    return httpx.HTTPStatusError(
        f"HTTP {status}", request=request, response=response
    )


@dataclass
class LogEntry:
    """One captured log call."""

    level: str
    message: str
    context: dict[str, Any]


@dataclass
class RecordingLogger:
    """LoggerProtocol fake capturing entries instead of printing."""

    entries: list[LogEntry] = field(default_factory=list)

    def debug(self, message: str, /, **context: Any) -> None:
        self.entries.append(LogEntry("debug", message, context))

    def info(self, message: str, /, **context: Any) -> None:
        self.entries.append(LogEntry("info", message, context))

    def warning(self, message: str, /, **context: Any) -> None:
        self.entries.append(LogEntry("warning", message, context))

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        self.entries.append(LogEntry("error", message, context))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        self.entries.append(LogEntry("critical", message, context))

    def bind(self, **context: Any) -> "RecordingLogger":
        return self

    def at(self, level: str) -> list[LogEntry]:
        """Entries logged at ``level`` (excluding debug noise elsewhere)."""
        return [entry for entry in self.entries if entry.level == level]

    def messages(self) -> list[str]:
        return [entry.message for entry in self.entries]

    def non_debug(self) -> list[LogEntry]:
        return [entry for entry in self.entries if entry.level != "debug"]


@dataclass
class FakeCredentialManager:
    """CredentialManagerProtocol fake.

    Attributes:
        ensure_calls: Number of ensure_authenticated() calls.
        authenticate_calls: Number of authenticate() calls.
        authenticate_error: Raised by authenticate() when set.
        events: Shared call-order log (optional).
    """

    ensure_calls: int = 0
    authenticate_calls: int = 0
    ensure_error: Exception | None = None
    authenticate_error: Exception | None = None
    events: list[str] = field(default_factory=list)

    async def ensure_authenticated(self) -> None:
        self.ensure_calls += 1
        self.events.append("ensure_authenticated")
        if self.ensure_error is not None:
            raise self.ensure_error

    async def authenticate(self) -> None:
        self.authenticate_calls += 1
        self.events.append("authenticate")
        if self.authenticate_error is not None:
            raise self.authenticate_error
