"""OrgAdminUser database model.

Local half of an organisation administrator; the identity half lives in
Keycloak and is linked by ``keycloak_user_id``.

Indexes:
    - keycloak_user_id: unique (one local row per identity-store user)
    - organization_id: listing administrators of an organisation
"""

from uuid import UUID

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from orgadmin.infrastructure.persistence.base import BaseMutableModel


class OrgAdminUser(BaseMutableModel):
    """Organisation administrator row."""

    __tablename__ = "org_admin_users"

    keycloak_user_id: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    organization_id: Mapped[UUID] = mapped_column(Uuid, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
