"""Common Pydantic schemas."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class RequestSchema(BaseModel):
    """Base for request bodies; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class ErrorResponse(BaseModel):
    """Error response schema."""

    message: str
    error_code: Optional[str] = None
    errors: Optional[list[dict[str, Any]]] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    app: str
