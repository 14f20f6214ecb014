"""Application services.

Exports:
    AuthenticatedOperationRunner: Single retry after re-authentication on 401
    DualStoreCoordinator: External-then-local write with one compensation
    OrgAdminUserService: Org admin provisioning built on both
"""

from orgadmin.application.services.authenticated_operation_runner import (
    AuthenticatedOperationRunner,
)
from orgadmin.application.services.dual_store_coordinator import (
    DualStoreCoordinator,
    RollbackOutcome,
    SagaOutcome,
)
from orgadmin.application.services.org_admin_user_service import OrgAdminUserService

__all__ = [
    "AuthenticatedOperationRunner",
    "DualStoreCoordinator",
    "OrgAdminUserService",
    "RollbackOutcome",
    "SagaOutcome",
]
