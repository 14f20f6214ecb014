"""Identity service (Keycloak) adapters.

Exports:
    ExternalErrorMapper: Failure -> DomainError translation
    ExternalServiceFailure: Normalised failure record
    KeycloakAdminService: Credential manager and admin API client
"""

from orgadmin.infrastructure.identity.error_mapper import ExternalErrorMapper
from orgadmin.infrastructure.identity.external_failure import (
    ExternalServiceFailure,
    FailureBody,
)
from orgadmin.infrastructure.identity.keycloak_admin_service import (
    KeycloakAdminService,
)

__all__ = [
    "ExternalErrorMapper",
    "ExternalServiceFailure",
    "FailureBody",
    "KeycloakAdminService",
]
