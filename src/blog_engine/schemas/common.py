"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    """Envelope for operations that only report success."""

    success: bool = True
    message: str | None = None


class IdResponse(BaseResponse):
    """Envelope returned after creating a resource."""

    id: int = Field(..., description="Identifier of the created resource")


class ErrorResponse(BaseModel):
    """Envelope rendered for every failed request."""

    success: bool = False
    message: str
    errors: list[dict[str, Any]] | None = Field(
        None, description="Field-level detail for validation failures"
    )
