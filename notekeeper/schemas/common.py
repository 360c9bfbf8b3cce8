"""Shared response schemas: the error envelope and the health document."""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by every failing endpoint.

    Example:
        {
            "error": "Note not found",
            "code": "not_found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Human-readable error message")
    code: str = Field(description="Machine-readable error code")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
