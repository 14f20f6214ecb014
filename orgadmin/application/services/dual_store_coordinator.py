"""Best-effort saga across the identity store and the local database.

Order within one call:
    1. external_write()            failure -> re-raised unchanged, nothing else runs
    2. local_write()               success -> result returned, no compensation
    3. compensate() exactly once   only if 1 succeeded and 2 failed
    4. re-raise the local failure  compensation failures are logged, never raised

Limitation: nothing is persisted before step 1. If the process dies after
the external write commits and before step 2 is observed, the identity
store keeps an orphaned record and there is no intent log to recover it.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from orgadmin.domain.protocols.logger_protocol import LoggerProtocol


class RollbackOutcome(Enum):
    """Result of the compensating action."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(kw_only=True)
class SagaOutcome:
    """Transient state of one coordinator call (never persisted).

    Attributes:
        external_committed: External write completed.
        local_result: Value returned by the local write.
        local_error: Failure raised by the local write.
        rollback_attempted: Compensation was invoked.
        rollback_outcome: How compensation ended, if attempted.
    """

    external_committed: bool = False
    local_result: Any = None
    local_error: Exception | None = None
    rollback_attempted: bool = False
    rollback_outcome: RollbackOutcome | None = None


class DualStoreCoordinator:
    """Run an external write then a local write as one logical operation.

    Example:
        >>> coordinator = DualStoreCoordinator(logger=logger)
        >>> user = await coordinator.run(
        ...     external_write=create_in_keycloak,
        ...     local_write=insert_row,
        ...     compensate=delete_from_keycloak,
        ...     operation_name="create_org_admin_user",
        ... )
    """

    def __init__(self, *, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def run[T](
        self,
        external_write: Callable[[], Awaitable[Any]],
        local_write: Callable[[], Awaitable[T]],
        compensate: Callable[[], Awaitable[Any]],
        operation_name: str = "dual_store_operation",
    ) -> T:
        """Execute the saga.

        Args:
            external_write: Write against the identity store.
            local_write: Write against the local database.
            compensate: Undo for ``external_write``.
            operation_name: Name used in log entries.

        Returns:
            The local write's result.

        Raises:
            Exception: The external failure unchanged, or the ORIGINAL local
                failure (never the compensation failure).
        """
        outcome = SagaOutcome()

        await external_write()
        outcome.external_committed = True

        try:
            outcome.local_result = await local_write()
        except Exception as e:
            outcome.local_error = e
            await self._compensate(compensate, outcome, operation_name)
            raise

        return outcome.local_result

    async def _compensate(
        self,
        compensate: Callable[[], Awaitable[Any]],
        outcome: SagaOutcome,
        operation_name: str,
    ) -> None:
        self._logger.error(
            "local_write_failed_attempting_rollback",
            error=outcome.local_error,
            operation_name=operation_name,
        )
        outcome.rollback_attempted = True
        try:
            await compensate()
        except Exception as rollback_error:
            outcome.rollback_outcome = RollbackOutcome.FAILED
            self._logger.error(
                "external_rollback_failed",
                operation_name=operation_name,
                rollback_error=str(rollback_error),
                rollback_error_type=type(rollback_error).__name__,
                original_error=str(outcome.local_error),
                original_error_type=type(outcome.local_error).__name__,
            )
            return

        outcome.rollback_outcome = RollbackOutcome.SUCCEEDED
        self._logger.info("external_rollback_succeeded", operation_name=operation_name)
