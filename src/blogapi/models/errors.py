"""
Error Models

Pydantic models describing the JSON error body shared by every non-2xx response.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from blogapi.docs.openapi_examples import RATE_LIMIT_ERROR_EXAMPLE, VALIDATION_ERROR_EXAMPLE


class ErrorDetail(BaseModel):
    """Per-field validation message."""

    field: str = Field(..., description="Offending field")
    message: str = Field(..., description="What is wrong with it")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Short error title")
    message: str = Field(..., description="Human-readable message")
    code: int = Field(..., description="HTTP status code")
    details: list[ErrorDetail] | None = Field(None, description="Validation details")
    retryAfter: int | None = Field(None, description="Seconds before retrying (429 only)")
    availableEndpoints: list[str] | None = Field(None, description="Known routes (404 only)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Not Found",
                "message": "Article not found",
                "code": 404,
            }
        }
    }


_DESCRIPTIONS = {
    400: "Validation error",
    401: "Missing or invalid bearer token",
    404: "Resource not found",
    429: "Rate limit exceeded",
}

_EXAMPLES = {
    400: VALIDATION_ERROR_EXAMPLE,
    429: RATE_LIMIT_ERROR_EXAMPLE,
}


def error_responses(*codes: int) -> dict[int | str, dict[str, Any]]:
    """Build a FastAPI ``responses`` mapping documenting error status codes."""
    responses: dict[int | str, dict[str, Any]] = {}
    for code in codes:
        entry: dict[str, Any] = {
            "model": ErrorResponse,
            "description": _DESCRIPTIONS.get(code, "Error"),
        }
        if code in _EXAMPLES:
            entry["content"] = {"application/json": {"example": _EXAMPLES[code]}}
        responses[code] = entry
    return responses
