"""Unit tests for ExternalErrorMapper.

Tests cover:
- Status -> kind table (every documented status, plus unknown/None -> INTERNAL)
- "<service> service error: " prefix for 5xx gateway statuses
- Message precedence and fallback "<service> operation failed"
- 422 maps to VALIDATION without field errors
- Raw failure logged at error level before mapping
"""

import pytest

from orgadmin.core.enums import ErrorKind
from orgadmin.core.errors import DomainError, FieldError
from orgadmin.infrastructure.identity.error_mapper import ExternalErrorMapper
from orgadmin.infrastructure.identity.external_failure import (
    ExternalServiceFailure,
    FailureBody,
)
from tests.utils.utils import http_status_error


@pytest.mark.unit
class TestStatusMapping:
    """Test the status table."""

    @pytest.mark.parametrize(
        ("status", "kind"),
        [
            (400, ErrorKind.BAD_REQUEST),
            (401, ErrorKind.AUTH),
            (403, ErrorKind.FORBIDDEN),
            (404, ErrorKind.NOT_FOUND),
            (409, ErrorKind.CONFLICT),
            (422, ErrorKind.VALIDATION),
            (500, ErrorKind.INTERNAL),
            (502, ErrorKind.INTERNAL),
            (503, ErrorKind.INTERNAL),
            (504, ErrorKind.INTERNAL),
        ],
    )
    def test_documented_statuses(self, mapper, status, kind):
        error = mapper.map(http_status_error(status, {"error": "upstream said no"}))

        assert isinstance(error, DomainError)
        assert error.kind is kind

    @pytest.mark.parametrize("status", [None, 302, 418, 429, 501, 505])
    def test_other_statuses_are_internal_verbatim(self, mapper, status):
        error = mapper.map(ExternalServiceFailure(status=status, message="odd failure"))

        assert error.kind is ErrorKind.INTERNAL
        assert error.message == "odd failure"

    @pytest.mark.parametrize("status", [500, 502, 503, 504])
    def test_gateway_statuses_are_prefixed(self, mapper, status):
        error = mapper.map(ExternalServiceFailure(status=status, message="down"))

        assert error.message == "Keycloak service error: down"

    def test_prefix_uses_service_name(self, logger):
        mapper = ExternalErrorMapper(logger=logger, service_name="IdP")

        error = mapper.map(ExternalServiceFailure(status=503, message="down"))

        assert error.message == "IdP service error: down"

    def test_422_has_no_field_errors(self, mapper):
        error = mapper.map(http_status_error(422, {"errorMessage": "Password policy"}))

        assert error.kind is ErrorKind.VALIDATION
        assert error.message == "Password policy"
        assert error.field_errors == ()

    def test_flat_status_code_is_used(self, mapper):
        error = mapper.map({"statusCode": 404, "message": "Realm not found"})

        assert error.kind is ErrorKind.NOT_FOUND
        assert error.message == "Realm not found"

    def test_plain_exception_is_internal(self, mapper):
        error = mapper.map(ConnectionError("connection refused"))

        assert error.kind is ErrorKind.INTERNAL
        assert error.message == "connection refused"


@pytest.mark.unit
class TestMessageExtraction:
    """Test which message ends up on the DomainError."""

    @pytest.mark.parametrize(
        ("body", "expected"),
        [
            ({"errorMessage": "A", "error_description": "B", "error": "C"}, "A"),
            ({"error_description": "B", "error": "C"}, "B"),
            ({"error": "C"}, "C"),
        ],
    )
    def test_body_precedence(self, mapper, body, expected):
        assert mapper.map(http_status_error(409, body)).message == expected

    def test_falls_back_to_error_message(self, mapper):
        failure = ExternalServiceFailure(status=404, body=FailureBody(), message="HTTP 404")

        assert mapper.map(failure).message == "HTTP 404"

    def test_falls_back_to_literal(self, mapper):
        assert mapper.map(ExternalServiceFailure(status=409)).message == (
            "Keycloak operation failed"
        )


@pytest.mark.unit
class TestLogging:
    """Test the unconditional diagnostic log."""

    def test_logs_raw_failure_at_error(self, mapper, logger):
        mapper.map(http_status_error(409, {"errorMessage": "dup", "field": "username"}))

        [entry] = logger.entries
        assert entry.level == "error"
        assert entry.message == "identity_service_error"
        assert entry.context["status"] == 409
        assert entry.context["message"] == "dup"
        assert entry.context["body"] == {"errorMessage": "dup", "field": "username"}

    def test_logs_stack_when_raised(self, mapper, logger):
        try:
            raise http_status_error(500)
        except Exception as e:
            mapper.map(e)

        assert "HTTPStatusError" in logger.entries[0].context["stack"]

    def test_logs_even_when_status_is_unknown(self, mapper, logger):
        mapper.map(RuntimeError("weird"))

        assert len(logger.at("error")) == 1
        assert logger.entries[0].context["status"] is None


@pytest.mark.unit
class TestDomainErrorPassThrough:
    """DomainErrors raised inside an operation keep their classification."""

    @pytest.mark.parametrize(
        "error",
        [
            DomainError.conflict("dup"),
            DomainError.not_found("Org admin user not found"),
            DomainError.auth(),
        ],
    )
    def test_kind_and_message_survive(self, mapper, error):
        mapped = mapper.map(error)

        assert mapped.kind is error.kind
        assert mapped.message == error.message

    def test_validation_field_errors_survive(self, mapper):
        error = DomainError.validation(
            "Validation failed", [FieldError(field="email", message="Invalid email format")]
        )

        mapped = mapper.map(error)

        assert mapped.kind is ErrorKind.VALIDATION
        assert mapped.field_errors == error.field_errors

    def test_logged_with_domain_status(self, mapper, logger):
        mapper.map(DomainError.conflict("dup"))

        [entry] = logger.entries
        assert entry.context["status"] == 409
        assert entry.context["message"] == "dup"
