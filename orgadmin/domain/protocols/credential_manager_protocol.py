"""CredentialManagerProtocol - token lifecycle for the identity service.

The authenticated operation runner only needs two capabilities from a
credential manager, so this port stays minimal and easy to fake.
"""

from typing import Any, Protocol


class CredentialManagerProtocol(Protocol):
    """Keeps a valid service-account credential for the identity service."""

    async def ensure_authenticated(self) -> None:
        """Authenticate only if the current credential is missing or expired.

        Cheap no-op when the credential is still valid.
        """
        ...

    async def authenticate(self) -> None:
        """Force a fresh credential, regardless of current state."""
        ...


class IdentityAdminProtocol(CredentialManagerProtocol, Protocol):
    """Credential manager that also exposes the user admin calls we use."""

    async def create_user(self, representation: dict[str, Any]) -> str:
        """Create a user and return its identity-store ID."""
        ...

    async def delete_user(self, user_id: str) -> None:
        """Delete a user from the identity store."""
        ...
