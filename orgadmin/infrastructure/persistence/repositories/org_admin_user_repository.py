"""OrgAdminUserRepository - SQLAlchemy implementation of the repository port.

Maps between the domain OrgAdminUser entity and the database model.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.domain.entities.org_admin_user import OrgAdminUser
from orgadmin.infrastructure.persistence.models.org_admin_user import (
    OrgAdminUser as OrgAdminUserModel,
)


class OrgAdminUserRepository:
    """SQLAlchemy implementation of OrgAdminUserRepositoryProtocol.

    This class does NOT inherit from the protocol (structural typing).

    Example:
        >>> async with db.get_session() as session:
        ...     repo = OrgAdminUserRepository(session=session)
        ...     user = await repo.find_by_keycloak_user_id("kc-123")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, user: OrgAdminUser) -> OrgAdminUser:
        """Insert a new user.

        Raises:
            IntegrityError: If keycloak_user_id already exists.
        """
        model = self._to_model(user)
        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def find_by_id(self, user_id: UUID) -> OrgAdminUser | None:
        stmt = select(OrgAdminUserModel).where(OrgAdminUserModel.id == user_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_keycloak_user_id(
        self, keycloak_user_id: str
    ) -> OrgAdminUser | None:
        stmt = select(OrgAdminUserModel).where(
            OrgAdminUserModel.keycloak_user_id == keycloak_user_id
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def delete(self, user_id: UUID) -> None:
        """Hard delete (the identity-store user is already gone)."""
        await self.session.execute(
            delete(OrgAdminUserModel).where(OrgAdminUserModel.id == user_id)
        )
        await self.session.commit()

    @staticmethod
    def _to_domain(model: OrgAdminUserModel) -> OrgAdminUser:
        return OrgAdminUser(
            id=model.id,
            keycloak_user_id=model.keycloak_user_id,
            organization_id=model.organization_id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_model(user: OrgAdminUser) -> OrgAdminUserModel:
        return OrgAdminUserModel(
            id=user.id,
            keycloak_user_id=user.keycloak_user_id,
            organization_id=user.organization_id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
