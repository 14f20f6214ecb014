"""Pytest configuration and shared fixtures.

Loggers and credential managers are injected fakes, so no fixture patches
module-level singletons.
"""

import pytest

from orgadmin.application.services.authenticated_operation_runner import (
    AuthenticatedOperationRunner,
)
from orgadmin.application.services.dual_store_coordinator import DualStoreCoordinator
from orgadmin.infrastructure.identity.error_mapper import ExternalErrorMapper
from orgadmin.presentation.api.v1.errors import ErrorHandler
from tests.utils.utils import FakeCredentialManager, RecordingLogger


@pytest.fixture
def logger() -> RecordingLogger:
    """Capturing logger."""
    return RecordingLogger()


@pytest.fixture
def mapper(logger: RecordingLogger) -> ExternalErrorMapper:
    """Keycloak error mapper writing to the capturing logger."""
    return ExternalErrorMapper(logger=logger, service_name="Keycloak")


@pytest.fixture
def credentials() -> FakeCredentialManager:
    """Credential manager that always succeeds unless configured."""
    return FakeCredentialManager()


@pytest.fixture
def runner(logger: RecordingLogger, mapper: ExternalErrorMapper) -> AuthenticatedOperationRunner:
    return AuthenticatedOperationRunner(logger=logger, mapper=mapper)


@pytest.fixture
def coordinator(logger: RecordingLogger) -> DualStoreCoordinator:
    return DualStoreCoordinator(logger=logger)


@pytest.fixture
def error_handler(logger: RecordingLogger) -> ErrorHandler:
    return ErrorHandler(logger=logger)
