"""Keycloak admin service.

Credential manager and minimal admin REST client for the Keycloak realm
holding organisation users.

Key behaviour:
- Authenticates with the client credentials grant (service account)
- Treats the token as expired 10 seconds early (network latency buffer)
- ``ensure_authenticated()`` only hits the token endpoint when needed
- Admin calls raise ``httpx.HTTPStatusError`` on non-2xx responses so the
  error mapper can classify the status and body

Retrying after a 401 is NOT done here; wrap calls with
AuthenticatedOperationRunner.
"""

import time
from datetime import UTC, datetime
from typing import Any

import httpx

from orgadmin.core.constants import (
    BEARER_PREFIX,
    IDENTITY_SERVICE_TIMEOUT_DEFAULT,
    TOKEN_DEFAULT_LIFETIME_SECONDS,
    TOKEN_EXPIRY_BUFFER_SECONDS,
)
from orgadmin.domain.protocols.logger_protocol import LoggerProtocol


class KeycloakAdminService:
    """Keycloak service-account session plus admin API calls.

    Implements CredentialManagerProtocol (structurally).

    Example:
        >>> kc = KeycloakAdminService(
        ...     base_url="https://auth.example.org",
        ...     realm="orgadmin",
        ...     client_id="orgadmin-backend",
        ...     client_secret="secret",
        ...     logger=logger,
        ... )
        >>> await kc.ensure_authenticated()
        >>> user_id = await kc.create_user({"username": "ada@example.org"})
    """

    def __init__(
        self,
        *,
        base_url: str,
        realm: str,
        client_id: str,
        client_secret: str,
        logger: LoggerProtocol,
        timeout: float = IDENTITY_SERVICE_TIMEOUT_DEFAULT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._realm = realm
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._logger = logger
        self._access_token: str | None = None
        self._token_expires_at: float = 0.0

        self._logger.info(
            "keycloak_admin_service_initialized",
            base_url=self._base_url,
            realm=realm,
            client_id=client_id,
        )

    @property
    def token_url(self) -> str:
        return f"{self._base_url}/realms/{self._realm}/protocol/openid-connect/token"

    @property
    def users_url(self) -> str:
        return f"{self._base_url}/admin/realms/{self._realm}/users"

    # =========================================================================
    # Credential management
    # =========================================================================

    async def authenticate(self) -> None:
        """Obtain a fresh access token (client credentials grant).

        Raises:
            httpx.HTTPStatusError: Token endpoint rejected the credentials.
            httpx.RequestError: Token endpoint unreachable.
        """
        self._logger.debug(
            "keycloak_authenticating", client_id=self._client_id, realm=self._realm
        )
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self.token_url,
                    data={
                        "grant_type": "client_credentials",
                        "client_id": self._client_id,
                        "client_secret": self._client_secret,
                    },
                )
            response.raise_for_status()
        except httpx.HTTPError as e:
            self._logger.error(
                "keycloak_authentication_failed",
                error=e,
                client_id=self._client_id,
            )
            raise

        token_data = response.json()
        expires_in = int(token_data.get("expires_in") or TOKEN_DEFAULT_LIFETIME_SECONDS)
        self._access_token = token_data["access_token"]
        self._token_expires_at = time.time() + expires_in

        self._logger.info(
            "keycloak_authenticated",
            expires_in=expires_in,
            expires_at=datetime.fromtimestamp(self._token_expires_at, UTC).isoformat(),
        )

    def is_token_expired(self) -> bool:
        """True if the token is missing or expires within the buffer."""
        if self._access_token is None:
            return True
        return time.time() >= self._token_expires_at - TOKEN_EXPIRY_BUFFER_SECONDS

    async def ensure_authenticated(self) -> None:
        """Authenticate only when the current token is expired or missing."""
        if self.is_token_expired():
            self._logger.debug("keycloak_token_expired")
            await self.authenticate()

    # =========================================================================
    # Admin API
    # =========================================================================

    async def create_user(self, representation: dict[str, Any]) -> str:
        """Create a user and return its Keycloak ID.

        Args:
            representation: Keycloak UserRepresentation payload.

        Returns:
            ID parsed from the ``Location`` header.

        Raises:
            httpx.HTTPStatusError: On non-2xx response (409 for duplicates).
            ValueError: Response carried no usable ``Location`` header.
        """
        response = await self._request("POST", self.users_url, json_data=representation)
        location = response.headers.get("Location", "")
        user_id = location.rstrip("/").rsplit("/", 1)[-1]
        if not user_id:
            # The user may exist in Keycloak even though it cannot be located.
            self._logger.error(
                "keycloak_user_location_missing",
                status=response.status_code,
                body=response.text,
                username=representation.get("username"),
            )
            raise ValueError("Keycloak did not return the created user location")
        return user_id

    async def get_user(self, user_id: str) -> dict[str, Any]:
        """Fetch a user representation."""
        response = await self._request("GET", f"{self.users_url}/{user_id}")
        return response.json()

    async def delete_user(self, user_id: str) -> None:
        """Delete a user permanently."""
        await self._request("DELETE", f"{self.users_url}/{user_id}")

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json_data: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"{BEARER_PREFIX}{self._access_token or ''}"}
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.request(method, url, headers=headers, json=json_data)
        response.raise_for_status()
        return response
