"""Core errors package.

Usage:
    from orgadmin.core.errors import DomainError, FieldError
"""

from orgadmin.core.errors.domain_error import DomainError, FieldError

__all__ = [
    "DomainError",
    "FieldError",
]
