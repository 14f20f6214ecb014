"""Repository adapters."""

from orgadmin.infrastructure.persistence.repositories.org_admin_user_repository import (
    OrgAdminUserRepository,
)

__all__ = ["OrgAdminUserRepository"]
