"""OrgAdminUserRepositoryProtocol - local store port for org admin users."""

from typing import Protocol
from uuid import UUID

from orgadmin.domain.entities.org_admin_user import OrgAdminUser


class OrgAdminUserRepositoryProtocol(Protocol):
    """Persistence port for organisation administrator users."""

    async def save(self, user: OrgAdminUser) -> OrgAdminUser:
        """Insert a new user and return the stored entity."""
        ...

    async def find_by_id(self, user_id: UUID) -> OrgAdminUser | None:
        """Find a user by local ID."""
        ...

    async def find_by_keycloak_user_id(
        self, keycloak_user_id: str
    ) -> OrgAdminUser | None:
        """Find a user by identity-store ID."""
        ...

    async def delete(self, user_id: UUID) -> None:
        """Remove a user permanently."""
        ...
