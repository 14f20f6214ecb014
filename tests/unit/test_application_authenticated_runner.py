"""Unit tests for AuthenticatedOperationRunner.

Tests cover:
- Success on the first attempt (no authenticate() call)
- 401 then success: authenticate() once, operation twice
- 401 twice: AUTH error, operation bounded to two calls
- Non-401 failures: mapped immediately, never retried
- 401 detected on a flat status_code attribute
- Failing authenticate() during the retry
- 401 raised by ensure_authenticated() itself
- Log entries for the retry path
"""

import pytest

from orgadmin.core.enums import ErrorKind
from orgadmin.core.errors import DomainError
from tests.utils.utils import FakeCredentialManager, http_status_error


class _TokenExpired(Exception):
    def __init__(self) -> None:
        super().__init__("token expired")
        self.status_code = 401


class _ScriptedOperation:
    """Operation raising the scripted errors in order, then returning ``value``."""

    def __init__(self, *errors: Exception, value: str = "ok") -> None:
        self._errors = list(errors)
        self.value = value
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self._errors:
            raise self._errors.pop(0)
        return self.value


@pytest.mark.unit
class TestHappyPath:
    """Operation succeeds without a retry."""

    @pytest.mark.asyncio
    async def test_returns_value(self, runner, credentials):
        operation = _ScriptedOperation(value="user-1")

        result = await runner.run(credentials, operation, "get_user")

        assert result == "user-1"
        assert operation.calls == 1
        assert credentials.ensure_calls == 1
        assert credentials.authenticate_calls == 0

    @pytest.mark.asyncio
    async def test_ensure_runs_before_operation(self, runner, credentials):
        async def operation():
            credentials.events.append("operation")
            return None

        await runner.run(credentials, operation)

        assert credentials.events == ["ensure_authenticated", "operation"]

    @pytest.mark.asyncio
    async def test_nothing_logged(self, runner, credentials, logger):
        await runner.run(credentials, _ScriptedOperation())

        assert logger.entries == []


@pytest.mark.unit
class TestUnauthorizedRetry:
    """A single 401 triggers one re-authentication."""

    @pytest.mark.asyncio
    async def test_401_then_success(self, runner, credentials):
        operation = _ScriptedOperation(http_status_error(401), value="recovered")

        result = await runner.run(credentials, operation, "create_keycloak_user")

        assert result == "recovered"
        assert operation.calls == 2
        assert credentials.authenticate_calls == 1

    @pytest.mark.asyncio
    async def test_retry_order(self, runner, credentials):
        calls = []

        async def operation():
            calls.append("operation")
            credentials.events.append("operation")
            if len(calls) == 1:
                raise http_status_error(401)
            return None

        await runner.run(credentials, operation)

        assert credentials.events == [
            "ensure_authenticated",
            "operation",
            "authenticate",
            "operation",
        ]

    @pytest.mark.asyncio
    async def test_retry_is_logged_at_warning(self, runner, credentials, logger):
        await runner.run(
            credentials, _ScriptedOperation(http_status_error(401)), "delete_keycloak_user"
        )

        [entry] = logger.entries
        assert entry.level == "warning"
        assert entry.message == "identity_operation_unauthorized_retrying"
        assert entry.context["operation_name"] == "delete_keycloak_user"

    @pytest.mark.asyncio
    async def test_flat_status_code_401_is_retried(self, runner, credentials):
        operation = _ScriptedOperation(_TokenExpired())

        assert await runner.run(credentials, operation) == "ok"
        assert credentials.authenticate_calls == 1

    @pytest.mark.asyncio
    async def test_domain_auth_error_is_retried(self, runner, credentials):
        operation = _ScriptedOperation(DomainError.auth("Token expired"))

        assert await runner.run(credentials, operation) == "ok"
        assert credentials.authenticate_calls == 1

    @pytest.mark.asyncio
    async def test_401_from_ensure_authenticated_is_retried(self, runner):
        credentials = FakeCredentialManager(ensure_error=http_status_error(401))
        operation = _ScriptedOperation()

        assert await runner.run(credentials, operation) == "ok"
        assert credentials.authenticate_calls == 1
        assert operation.calls == 1


@pytest.mark.unit
class TestRetryExhausted:
    """Failures after the single retry are mapped and raised."""

    @pytest.mark.asyncio
    async def test_401_twice_raises_auth(self, runner, credentials):
        operation = _ScriptedOperation(
            http_status_error(401, {"error": "invalid_token"}),
            http_status_error(401, {"error": "invalid_token"}),
        )

        with pytest.raises(DomainError) as exc_info:
            await runner.run(credentials, operation)

        assert exc_info.value.kind is ErrorKind.AUTH
        assert exc_info.value.http_status == 401
        assert operation.calls == 2
        assert credentials.authenticate_calls == 1

    @pytest.mark.asyncio
    async def test_401_then_404_maps_second_failure(self, runner, credentials):
        operation = _ScriptedOperation(
            http_status_error(401),
            http_status_error(404, {"error": "User not found"}),
        )

        with pytest.raises(DomainError) as exc_info:
            await runner.run(credentials, operation)

        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_failed_retry_is_logged(self, runner, credentials, logger):
        operation = _ScriptedOperation(http_status_error(401), http_status_error(401))

        with pytest.raises(DomainError):
            await runner.run(credentials, operation, "get_user")

        assert logger.messages() == [
            "identity_operation_unauthorized_retrying",
            "identity_operation_failed_after_retry",
            "identity_service_error",
        ]
        assert logger.entries[1].context["retry_error"] == "HTTP 401"

    @pytest.mark.asyncio
    async def test_authenticate_failure_is_mapped(self, runner):
        credentials = FakeCredentialManager(
            authenticate_error=http_status_error(
                401, {"error": "unauthorized_client", "error_description": "Invalid client secret"}
            )
        )
        operation = _ScriptedOperation(http_status_error(401))

        with pytest.raises(DomainError) as exc_info:
            await runner.run(credentials, operation)

        assert exc_info.value.kind is ErrorKind.AUTH
        assert exc_info.value.message == "Invalid client secret"
        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_original_failure_is_chained(self, runner, credentials):
        last = http_status_error(401)
        operation = _ScriptedOperation(http_status_error(401), last)

        with pytest.raises(DomainError) as exc_info:
            await runner.run(credentials, operation)

        assert exc_info.value.__cause__ is last


@pytest.mark.unit
class TestNonUnauthorizedFailures:
    """Any status other than 401 is mapped without a retry."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "kind"),
        [
            (400, ErrorKind.BAD_REQUEST),
            (403, ErrorKind.FORBIDDEN),
            (404, ErrorKind.NOT_FOUND),
            (409, ErrorKind.CONFLICT),
            (503, ErrorKind.INTERNAL),
        ],
    )
    async def test_no_retry(self, runner, credentials, status, kind):
        operation = _ScriptedOperation(http_status_error(status))

        with pytest.raises(DomainError) as exc_info:
            await runner.run(credentials, operation)

        assert exc_info.value.kind is kind
        assert operation.calls == 1
        assert credentials.authenticate_calls == 0

    @pytest.mark.asyncio
    async def test_error_without_status_is_internal(self, runner, credentials):
        operation = _ScriptedOperation(ConnectionError("connection refused"))

        with pytest.raises(DomainError) as exc_info:
            await runner.run(credentials, operation)

        assert exc_info.value.kind is ErrorKind.INTERNAL
        assert exc_info.value.message == "connection refused"
        assert credentials.authenticate_calls == 0

    @pytest.mark.asyncio
    async def test_ensure_failure_other_than_401_is_mapped(self, runner):
        credentials = FakeCredentialManager(ensure_error=http_status_error(503))
        operation = _ScriptedOperation()

        with pytest.raises(DomainError) as exc_info:
            await runner.run(credentials, operation)

        assert exc_info.value.kind is ErrorKind.INTERNAL
        assert exc_info.value.message == "Keycloak service error: HTTP 503"
        assert operation.calls == 0
        assert credentials.authenticate_calls == 0

    @pytest.mark.asyncio
    async def test_only_mapper_logs(self, runner, credentials, logger):
        with pytest.raises(DomainError):
            await runner.run(credentials, _ScriptedOperation(http_status_error(409)))

        assert logger.messages() == ["identity_service_error"]

    @pytest.mark.asyncio
    async def test_domain_error_keeps_its_kind(self, runner, credentials):
        operation = _ScriptedOperation(DomainError.conflict("dup"))

        with pytest.raises(DomainError) as exc_info:
            await runner.run(credentials, operation)

        assert exc_info.value.kind is ErrorKind.CONFLICT
        assert exc_info.value.message == "dup"
        assert credentials.authenticate_calls == 0
