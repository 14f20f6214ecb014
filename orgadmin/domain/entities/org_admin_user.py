"""OrgAdminUser domain entity.

An organisation administrator exists in two stores: the identity store
(Keycloak, source of truth for login) and the local database (organisation
membership). ``keycloak_user_id`` links the two.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(kw_only=True)
class OrgAdminUser:
    """Organisation administrator.

    Attributes:
        id: Local identifier.
        keycloak_user_id: Identifier in the identity store.
        organization_id: Organisation the user administers.
        email: Login email (lowercase).
        first_name: Given name.
        last_name: Family name.
        created_at: Creation timestamp (UTC).
        updated_at: Last update timestamp (UTC).
    """

    id: UUID = field(default_factory=uuid7)
    keycloak_user_id: str
    organization_id: UUID
    email: str
    first_name: str
    last_name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
