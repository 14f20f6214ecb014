"""Composition root.

Application-scoped singletons (``lru_cache``):
- Logger (structlog console adapter)
- Keycloak admin service (credential manager + admin calls)
- Database (SQLAlchemy async engine)

Request-scoped factories wire the application services on top of them.
"""

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.core.config import settings

if TYPE_CHECKING:
    from orgadmin.application.services.org_admin_user_service import (
        OrgAdminUserService,
    )
    from orgadmin.domain.protocols.logger_protocol import LoggerProtocol
    from orgadmin.infrastructure.identity.keycloak_admin_service import (
        KeycloakAdminService,
    )
    from orgadmin.infrastructure.persistence.database import Database


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from orgadmin.infrastructure.logging.console_adapter import ConsoleAdapter

    env = (
        settings.environment.value
        if hasattr(settings.environment, "value")
        else str(settings.environment)
    )
    level = logging.getLevelNamesMapping().get(settings.log_level, logging.INFO)
    return ConsoleAdapter(use_json=env != "development", level=level)


@lru_cache()
def get_keycloak_admin() -> "KeycloakAdminService":
    """Return the Keycloak admin service singleton.

    One token per process is shared by all requests.
    """
    from orgadmin.infrastructure.identity.keycloak_admin_service import (
        KeycloakAdminService,
    )

    return KeycloakAdminService(
        base_url=settings.keycloak_base_url,
        realm=settings.keycloak_realm,
        client_id=settings.keycloak_client_id,
        client_secret=settings.keycloak_client_secret,
        timeout=settings.keycloak_timeout,
        logger=get_logger(),
    )


@lru_cache()
def get_database() -> "Database":
    """Return the database singleton (connection pool)."""
    from orgadmin.infrastructure.persistence.database import Database

    return Database(database_url=settings.database_url, echo=settings.db_echo)


def build_org_admin_user_service(session: AsyncSession) -> "OrgAdminUserService":
    """Wire OrgAdminUserService for one request.

    Args:
        session: Request-scoped database session.

    Returns:
        Service backed by the shared Keycloak admin and logger.
    """
    from orgadmin.application.services.authenticated_operation_runner import (
        AuthenticatedOperationRunner,
    )
    from orgadmin.application.services.dual_store_coordinator import (
        DualStoreCoordinator,
    )
    from orgadmin.application.services.org_admin_user_service import (
        OrgAdminUserService,
    )
    from orgadmin.infrastructure.identity.error_mapper import ExternalErrorMapper
    from orgadmin.infrastructure.persistence.repositories import (
        OrgAdminUserRepository,
    )

    logger = get_logger()
    mapper = ExternalErrorMapper(
        logger=logger, service_name=settings.identity_service_name
    )
    return OrgAdminUserService(
        keycloak=get_keycloak_admin(),
        repository=OrgAdminUserRepository(session=session),
        runner=AuthenticatedOperationRunner(logger=logger, mapper=mapper),
        coordinator=DualStoreCoordinator(logger=logger),
        logger=logger,
    )
