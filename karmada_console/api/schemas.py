"""Response envelopes for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope wrapping every successful response."""

    code: int = 200
    message: str = "success"
    data: Any = None


class ErrorResponse(BaseModel):
    """Envelope for failed requests. ``error`` is a stable machine code."""

    code: int
    message: str
    error: str
    data: Any = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
