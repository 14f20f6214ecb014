"""Domain protocols (ports).

Structural (PEP 544) interfaces implemented by infrastructure adapters.
"""

from orgadmin.domain.protocols.credential_manager_protocol import (
    CredentialManagerProtocol,
    IdentityAdminProtocol,
)
from orgadmin.domain.protocols.logger_protocol import LoggerProtocol
from orgadmin.domain.protocols.org_admin_user_repository import (
    OrgAdminUserRepositoryProtocol,
)

__all__ = [
    "CredentialManagerProtocol",
    "IdentityAdminProtocol",
    "LoggerProtocol",
    "OrgAdminUserRepositoryProtocol",
]
