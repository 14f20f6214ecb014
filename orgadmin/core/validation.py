"""Field validation collector.

Runs every rule against an input record and collects all failures before
raising a single VALIDATION DomainError. Rules never short-circuit.

A validator is any callable ``(value) -> str | None``: ``None`` means the
value passed, a string is the failure message.

Usage:
    from orgadmin.core.validation import ValidationRules, validate

    validate(
        payload,
        {
            "email": ValidationRules.email,
            "first_name": ValidationRules.required("First name"),
        },
    )
"""

import re
from collections.abc import Callable, Collection, Mapping
from typing import Any

from orgadmin.core.errors import DomainError, FieldError

type Validator = Callable[[Any], str | None]

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def validate(
    record: Mapping[str, Any],
    rules: Mapping[str, Validator],
    *,
    sensitive: Collection[str] = (),
) -> None:
    """Validate a record against per-field rules.

    Args:
        record: Input data (missing keys are passed to validators as None).
        rules: Field name to validator, evaluated in declaration order.
        sensitive: Fields whose rejected value is never copied into the
            FieldError (passwords, secrets).

    Raises:
        DomainError: VALIDATION kind with one FieldError per failing field,
            in rule order, each carrying the rejected raw value (None for
            sensitive fields).
    """
    errors: list[FieldError] = []

    for field, validator in rules.items():
        value = record.get(field)
        message = validator(value)
        if message:
            errors.append(
                FieldError(
                    field=field,
                    message=message,
                    value=None if field in sensitive else value,
                )
            )

    if errors:
        raise DomainError.validation("Validation failed", field_errors=errors)


def _is_absent(value: Any) -> bool:
    return value is None or value == ""


class ValidationRules:
    """Standard validators.

    Every validator except ``required`` treats an absent value (None or "")
    as a pass, so optional fields only need the format rule.
    """

    @staticmethod
    def required(field_name: str) -> Validator:
        """Reject None and empty string."""

        def check(value: Any) -> str | None:
            if _is_absent(value):
                return f"{field_name} is required"
            return None

        return check

    @staticmethod
    def email(value: Any) -> str | None:
        """Check email format."""
        if _is_absent(value):
            return None
        if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
            return "Invalid email format"
        return None

    @staticmethod
    def min_length(minimum: int) -> Validator:
        """Minimum string length."""

        def check(value: Any) -> str | None:
            if _is_absent(value):
                return None
            if isinstance(value, str) and len(value) < minimum:
                return f"Must be at least {minimum} characters"
            return None

        return check

    @staticmethod
    def max_length(maximum: int) -> Validator:
        """Maximum string length."""

        def check(value: Any) -> str | None:
            if _is_absent(value):
                return None
            if isinstance(value, str) and len(value) > maximum:
                return f"Must be at most {maximum} characters"
            return None

        return check

    @staticmethod
    def pattern(regex: str | re.Pattern[str], message: str) -> Validator:
        """String must contain a match for ``regex`` (``re.search``)."""
        compiled = re.compile(regex) if isinstance(regex, str) else regex

        def check(value: Any) -> str | None:
            if _is_absent(value):
                return None
            if isinstance(value, str) and not compiled.search(value):
                return message
            return None

        return check

    @staticmethod
    def all_of(*validators: Validator) -> Validator:
        """Combine validators for one field; first failure message wins."""

        def check(value: Any) -> str | None:
            for validator in validators:
                message = validator(value)
                if message:
                    return message
            return None

        return check
