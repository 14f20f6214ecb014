"""Run identity-service operations with a single re-authentication retry.

State machine (one call):

    START ──ensure_authenticated + operation──▶ success ─▶ DONE (value)
      │
      ├─ failure, status != 401 ─▶ DONE (raise mapped error)
      │
      └─ failure, status == 401 ─▶ RETRY
                                     │ authenticate + operation
                                     ├─ success ─▶ DONE (value)
                                     └─ failure ─▶ DONE (raise mapped error)

Bounds per call: ``operation`` at most twice, ``authenticate()`` at most once.
The credential manager's ``authenticate()`` is the only state mutated.
"""

from collections.abc import Awaitable, Callable
from enum import Enum

from orgadmin.core.result import Failure, Result, Success
from orgadmin.domain.protocols.credential_manager_protocol import (
    CredentialManagerProtocol,
)
from orgadmin.domain.protocols.logger_protocol import LoggerProtocol
from orgadmin.infrastructure.identity.error_mapper import ExternalErrorMapper
from orgadmin.infrastructure.identity.external_failure import ExternalServiceFailure

UNAUTHORIZED_STATUS = 401


class RunnerState(Enum):
    """States of one authenticated run."""

    START = "start"
    RETRY = "retry"
    DONE = "done"


class AuthenticatedOperationRunner:
    """Execute an operation with a valid credential, retrying once on 401.

    Example:
        >>> runner = AuthenticatedOperationRunner(logger=logger, mapper=mapper)
        >>> user = await runner.run(
        ...     keycloak,
        ...     lambda: keycloak.get_user(user_id),
        ...     "get_user",
        ... )
    """

    def __init__(self, *, logger: LoggerProtocol, mapper: ExternalErrorMapper) -> None:
        self._logger = logger
        self._mapper = mapper

    async def run[T](
        self,
        credential_manager: CredentialManagerProtocol,
        operation: Callable[[], Awaitable[T]],
        operation_name: str = "identity_operation",
    ) -> T:
        """Run ``operation`` under the retry state machine.

        Args:
            credential_manager: Supplies ensure_authenticated/authenticate.
            operation: Zero-argument coroutine factory (called per attempt).
            operation_name: Name used in log entries.

        Returns:
            The operation's result.

        Raises:
            DomainError: Mapped from the final failure.
        """
        state = RunnerState.START
        outcome: Result[T, Exception] = Failure(error=RuntimeError("not started"))

        while state is not RunnerState.DONE:
            match state:
                case RunnerState.START:
                    outcome = await self._attempt(
                        credential_manager.ensure_authenticated, operation
                    )
                    if isinstance(outcome, Failure) and _is_unauthorized(outcome.error):
                        self._logger.warning(
                            "identity_operation_unauthorized_retrying",
                            operation_name=operation_name,
                        )
                        state = RunnerState.RETRY
                    else:
                        state = RunnerState.DONE

                case RunnerState.RETRY:
                    outcome = await self._attempt(
                        credential_manager.authenticate, operation
                    )
                    if isinstance(outcome, Failure):
                        self._logger.error(
                            "identity_operation_failed_after_retry",
                            operation_name=operation_name,
                            retry_error=str(outcome.error),
                        )
                    state = RunnerState.DONE

        match outcome:
            case Success(value=value):
                return value
            case Failure(error=error):
                raise self._mapper.map(error) from error

    @staticmethod
    async def _attempt[T](
        authenticate: Callable[[], Awaitable[None]],
        operation: Callable[[], Awaitable[T]],
    ) -> Result[T, Exception]:
        try:
            await authenticate()
            return Success(value=await operation())
        except Exception as e:
            return Failure(error=e)


def _is_unauthorized(error: Exception) -> bool:
    return ExternalServiceFailure.status_of(error) == UNAUTHORIZED_STATUS
