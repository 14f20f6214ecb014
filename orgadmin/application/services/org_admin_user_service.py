"""Organisation administrator provisioning.

Org admin users live in Keycloak (login) and in the local database
(organisation membership). Creation goes through DualStoreCoordinator so a
failed database insert deletes the freshly created Keycloak user; every
Keycloak call goes through AuthenticatedOperationRunner so an expired
service-account token is refreshed once.
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from orgadmin.application.services.authenticated_operation_runner import (
    AuthenticatedOperationRunner,
)
from orgadmin.application.services.dual_store_coordinator import DualStoreCoordinator
from orgadmin.core.enums import ErrorKind
from orgadmin.core.errors import DomainError
from orgadmin.core.validation import ValidationRules, Validator, validate
from orgadmin.domain.entities.org_admin_user import OrgAdminUser
from orgadmin.domain.protocols.credential_manager_protocol import IdentityAdminProtocol
from orgadmin.domain.protocols.logger_protocol import LoggerProtocol
from orgadmin.domain.protocols.org_admin_user_repository import (
    OrgAdminUserRepositoryProtocol,
)

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z"
NAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8
SENSITIVE_FIELDS = frozenset({"temporary_password"})

CREATE_ADMIN_USER_RULES: dict[str, Validator] = {
    "email": ValidationRules.all_of(
        ValidationRules.required("Email"), ValidationRules.email
    ),
    "first_name": ValidationRules.all_of(
        ValidationRules.required("First name"),
        ValidationRules.max_length(NAME_MAX_LENGTH),
    ),
    "last_name": ValidationRules.all_of(
        ValidationRules.required("Last name"),
        ValidationRules.max_length(NAME_MAX_LENGTH),
    ),
    "organization_id": ValidationRules.all_of(
        ValidationRules.required("Organisation"),
        ValidationRules.pattern(UUID_PATTERN, "Invalid organisation ID"),
    ),
    "temporary_password": ValidationRules.min_length(PASSWORD_MIN_LENGTH),
}


class OrgAdminUserService:
    """Create, read and delete organisation administrators."""

    def __init__(
        self,
        *,
        keycloak: IdentityAdminProtocol,
        repository: OrgAdminUserRepositoryProtocol,
        runner: AuthenticatedOperationRunner,
        coordinator: DualStoreCoordinator,
        logger: LoggerProtocol,
    ) -> None:
        self._keycloak = keycloak
        self._repository = repository
        self._runner = runner
        self._coordinator = coordinator
        self._logger = logger

    async def create_admin_user(self, data: Mapping[str, Any]) -> OrgAdminUser:
        """Create the user in Keycloak, then locally.

        Args:
            data: email, first_name, last_name, organization_id and an
                optional temporary_password.

        Returns:
            The stored OrgAdminUser.

        Raises:
            DomainError: VALIDATION for bad input, or a mapped Keycloak error.
            Exception: The original database failure (after Keycloak rollback).
        """
        validate(data, CREATE_ADMIN_USER_RULES, sensitive=SENSITIVE_FIELDS)

        email = str(data["email"]).strip().lower()
        representation = _user_representation(data, email)
        created: dict[str, str] = {}

        async def create_in_keycloak() -> None:
            created["keycloak_user_id"] = await self._runner.run(
                self._keycloak,
                lambda: self._keycloak.create_user(representation),
                "create_keycloak_user",
            )

        async def save_locally() -> OrgAdminUser:
            return await self._repository.save(
                OrgAdminUser(
                    keycloak_user_id=created["keycloak_user_id"],
                    organization_id=UUID(str(data["organization_id"])),
                    email=email,
                    first_name=str(data["first_name"]).strip(),
                    last_name=str(data["last_name"]).strip(),
                )
            )

        async def delete_from_keycloak() -> None:
            await self._runner.run(
                self._keycloak,
                lambda: self._keycloak.delete_user(created["keycloak_user_id"]),
                "delete_keycloak_user",
            )

        user = await self._coordinator.run(
            create_in_keycloak,
            save_locally,
            delete_from_keycloak,
            "create_org_admin_user",
        )
        self._logger.info(
            "org_admin_user_created",
            user_id=str(user.id),
            keycloak_user_id=user.keycloak_user_id,
            organization_id=str(user.organization_id),
        )
        return user

    async def get_admin_user(self, user_id: UUID) -> OrgAdminUser:
        """Fetch one user.

        Raises:
            DomainError: NOT_FOUND if the user does not exist.
        """
        user = await self._repository.find_by_id(user_id)
        if user is None:
            raise DomainError.not_found(f"Org admin user not found: {user_id}")
        return user

    async def delete_admin_user(self, user_id: UUID) -> None:
        """Delete from Keycloak, then locally.

        A user already missing from Keycloak is still removed locally.

        Raises:
            DomainError: NOT_FOUND if the user does not exist locally, or a
                mapped Keycloak error.
        """
        user = await self.get_admin_user(user_id)

        try:
            await self._runner.run(
                self._keycloak,
                lambda: self._keycloak.delete_user(user.keycloak_user_id),
                "delete_keycloak_user",
            )
        except DomainError as e:
            if e.kind is not ErrorKind.NOT_FOUND:
                raise
            self._logger.warning(
                "keycloak_user_already_absent",
                user_id=str(user_id),
                keycloak_user_id=user.keycloak_user_id,
            )

        await self._repository.delete(user_id)
        self._logger.info("org_admin_user_deleted", user_id=str(user_id))


def _user_representation(data: Mapping[str, Any], email: str) -> dict[str, Any]:
    representation: dict[str, Any] = {
        "username": email,
        "email": email,
        "firstName": str(data["first_name"]).strip(),
        "lastName": str(data["last_name"]).strip(),
        "enabled": True,
        "emailVerified": False,
        "attributes": {"organization_id": [str(data["organization_id"])]},
    }
    password = data.get("temporary_password")
    if password:
        representation["credentials"] = [
            {"type": "password", "value": password, "temporary": True}
        ]
    return representation
