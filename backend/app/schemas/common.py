"""
Daybook Backend — Shared Pydantic Schemas
===========================================

What:  Base classes and the error/health models used by every route.
Why:   One place decides the wire conventions: camelCase field names on the
       way out, loose input models on the way in.

Input models accept `Any` for every field and ignore unknown keys (a client
sending `userId` or `id` simply has it dropped). Type and presence checks
happen in app.validation so that they surface as 400 responses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.validation import as_utc


class ResourceIn(BaseModel):
    """Base for create/update request bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ResourceOut(BaseModel):
    """
    Base for records returned to clients.

    Built from ORM objects (`from_attributes`) and serialized with camelCase
    aliases. Datetimes read back from SQLite are naive; they are normalised
    to UTC so responses always carry an offset.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("*", mode="after")
    @classmethod
    def _datetimes_in_utc(cls, v):
        if isinstance(v, datetime):
            return as_utc(v)
        return v


class ErrorResponse(BaseModel):
    """
    Error body for all API errors.

    Example:
        {"error": "Task not found", "request_id": "1f0c2a9b"}
    """
    error: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
