"""Logging adapters implementing LoggerProtocol."""

from orgadmin.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
