"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from orgadmin.core.enums import ErrorKind, Environment
"""

from orgadmin.core.enums.environment import Environment
from orgadmin.core.enums.error_kind import ErrorKind

__all__ = ["ErrorKind", "Environment"]
