"""RFC 7807 Problem Details for HTTP APIs.

Every error raised by the marketplace API (except the analytics dashboard,
which keeps a schema-stable degraded body) is rendered as an
``application/problem+json`` document.

Reference: https://datatracker.ietf.org/doc/html/rfc7807
"""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.core.logging import request_id_ctx

# =============================================================================
# Error Type URIs
# =============================================================================

ERROR_TYPE_BASE = "/errors"

ERROR_TYPES = {
    "NOT_FOUND": f"{ERROR_TYPE_BASE}/not-found",
    "VALIDATION_ERROR": f"{ERROR_TYPE_BASE}/validation",
    "DATABASE_ERROR": f"{ERROR_TYPE_BASE}/database",
    "INTERNAL_ERROR": f"{ERROR_TYPE_BASE}/internal",
    "BAD_REQUEST": f"{ERROR_TYPE_BASE}/bad-request",
    "SERVICE_UNAVAILABLE": f"{ERROR_TYPE_BASE}/service-unavailable",
}


# =============================================================================
# Problem Detail Schema
# =============================================================================


class ProblemDetail(BaseModel):
    """RFC 7807 problem document.

    Attributes:
        type: URI identifying the error type.
        title: Short human-readable summary of the problem.
        status: HTTP status code.
        detail: Explanation specific to this occurrence.
        instance: URI reference for this occurrence.
        errors: Field-level validation errors (extension for 422).
        code: Machine-readable error code (extension).
        request_id: Request correlation ID (extension).
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="about:blank", description="URI reference identifying the problem type.")
    title: str = Field(..., description="Short summary of the problem type.")
    status: int = Field(..., ge=400, le=599, description="HTTP status code.")
    detail: str | None = Field(None, description="Explanation specific to this occurrence.")
    instance: str | None = Field(None, description="URI reference for this occurrence.")
    errors: list[dict[str, Any]] | None = Field(None, description="Field-level validation errors.")
    code: str | None = Field(None, description="Machine-readable error code.")
    request_id: str | None = Field(None, description="Request correlation ID.")


class ProblemDetailResponse(JSONResponse):
    """JSON response with the RFC 7807 media type."""

    media_type = "application/problem+json"


# =============================================================================
# Helper Functions
# =============================================================================


def create_problem_detail(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
) -> ProblemDetail:
    """Build a ProblemDetail bound to the current request id.

    Args:
        status: HTTP status code.
        title: Short problem summary.
        detail: Detailed explanation (optional).
        error_code: Internal error code for type URI lookup.
        errors: Field-level validation errors (optional).

    Returns:
        Configured ProblemDetail instance.
    """
    request_id = request_id_ctx.get()

    return ProblemDetail(
        type=ERROR_TYPES.get(error_code, f"{ERROR_TYPE_BASE}/{error_code.lower()}"),
        title=title,
        status=status,
        detail=detail,
        instance=f"/requests/{request_id}" if request_id else None,
        errors=errors,
        code=error_code,
        request_id=request_id,
    )


def problem_response(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
) -> ProblemDetailResponse:
    """Create a ProblemDetailResponse with the proper content type."""
    problem = create_problem_detail(
        status=status,
        title=title,
        detail=detail,
        error_code=error_code,
        errors=errors,
    )

    return ProblemDetailResponse(
        status_code=status,
        content=problem.model_dump(exclude_none=True),
    )
