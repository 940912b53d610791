"""RFC 7807 Problem Details for HTTP APIs.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 7807 compliant error response schema
"""

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Examples:
        >>> ErrorDetail(field="email", code="invalid_email", message="Invalid email format")
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Extension members (``requires_verification``, ``locked_until``, ...) are
    allowed and serialized next to the standard fields.

    Examples:
        >>> ProblemDetails(
        ...     type="http://localhost:8000/errors/account_locked",
        ...     title="Account Locked",
        ...     status=423,
        ...     detail="Account is locked due to too many failed login attempts",
        ...     instance="/api/v1/sessions",
        ...     locked_until="2026-10-19T12:15:00+00:00",
        ... )
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Explanation specific to this occurrence")
    instance: str = Field(..., description="URI reference of the occurrence")
    errors: list[ErrorDetail] | None = Field(
        default=None, description="Field-specific errors (validation failures)"
    )
    trace_id: str | None = Field(default=None, description="Request trace ID")
