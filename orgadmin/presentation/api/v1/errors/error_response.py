"""Structured error response schema.

Every error response has the same envelope:

    {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Validation failed",
            "details": [{"field": "email", "message": "Invalid email format", "value": "bad"}],
            "correlationId": "0190f1c2-..."
        }
    }

``details`` is present only for validation failures and ``correlationId``
only for internal and unexpected errors. Stack traces never appear here.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FieldErrorDetail(BaseModel):
    """Individual field-specific error.

    Examples:
        >>> detail = FieldErrorDetail(
        ...     field="email",
        ...     message="Invalid email format",
        ...     value="not-an-email",
        ... )
    """

    field: str = Field(..., description="Field name")
    message: str = Field(..., description="Human-readable error message")
    value: Any = Field(None, description="Rejected value")


class ErrorBody(BaseModel):
    """Error payload."""

    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["VALIDATION_ERROR"],
    )
    message: str = Field(
        ...,
        description="User-facing message",
        examples=["Validation failed"],
    )
    details: list[FieldErrorDetail] | None = Field(
        None,
        description="Field-level errors (validation only)",
    )
    correlation_id: str | None = Field(
        None,
        alias="correlationId",
        description="Support reference for server logs",
    )


class ErrorEnvelope(BaseModel):
    """Top-level error response."""

    error: ErrorBody

    def to_content(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase aliases and no empty fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
