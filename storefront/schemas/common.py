"""Error schemas shared by all endpoints."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error detail (stable `code`, human `message`)."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error body: { "error": { "code", "message", "detail" } }."""

    error: ErrorDetail
