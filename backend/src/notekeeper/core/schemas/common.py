"""
Shared response schemas - errors, plain messages, health
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str = Field(description="Human-readable error message")
    details: Optional[list[dict[str, Any]]] = Field(
        default=None, description="Field-level problems for validation errors"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Note not found"}}
    )


class MessageResponse(BaseModel):
    message: str = Field(description="Outcome message")


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2025-09-13T10:30:00Z",
                "version": "1.0.0",
                "checks": {
                    "database": {
                        "connected": True,
                        "status": "healthy",
                        "response_time_ms": 15,
                        "user_count": 3,
                    }
                },
            }
        }
    )
