"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Domain error taxonomy (DomainError, FieldError, ErrorKind)
- Result types for the authenticated retry state machine
- Field validation collector

The core module has NO dependencies on other application layers.
"""

from orgadmin.core.enums import ErrorKind
from orgadmin.core.errors import DomainError, FieldError
from orgadmin.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorKind",
    "Failure",
    "FieldError",
    "Result",
    "Success",
]
