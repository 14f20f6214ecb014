"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `orgadmin/core/config.py` instead.

Example:
    >>> from orgadmin.core.constants import TOKEN_EXPIRY_BUFFER_SECONDS
"""

# =============================================================================
# Identity service tokens
# =============================================================================

TOKEN_EXPIRY_BUFFER_SECONDS: int = 10
"""Treat a token as expired this many seconds early (network latency)."""

TOKEN_DEFAULT_LIFETIME_SECONDS: int = 60
"""Token lifetime used when the token endpoint omits ``expires_in``."""


# =============================================================================
# Timeouts
# =============================================================================

IDENTITY_SERVICE_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for identity service HTTP calls in seconds."""


# =============================================================================
# Error responses
# =============================================================================

UNEXPECTED_ERROR_MESSAGE: str = "An unexpected error occurred"
"""Client message for errors that were never classified."""

UNEXPECTED_ERROR_CODE: str = "INTERNAL_ERROR"
"""Client code for errors that were never classified."""


# =============================================================================
# Prefixes
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""
