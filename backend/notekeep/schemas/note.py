"""
NoteKeep — Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the HTTP contract.
How:   FastAPI validates request bodies against these, serializes responses
       through them, and generates the OpenAPI docs from them.

Schemas are separate from notekeep.models so the wire format can change
without touching the persisted layout.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /note.

    Both fields are optional here on purpose: a missing or empty field is
    reported by the store as TITLE_OR_CONTENT_MISSING (→ 409), not as a
    schema error.
    """
    title: Optional[str] = Field(default=None, description="Unique note title")
    content: Optional[str] = Field(default=None, description="Note text")


class NoteUpdate(BaseModel):
    """Body of PUT /note/{id}. Fields left out (or empty) are not changed."""
    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New content")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note, as returned by every read endpoint."""
    id: int = Field(description="Numeric note identifier, never reused")
    title: str = Field(description="Unique title (exact, case-sensitive)")
    content: str = Field(description="Note text")
    created: datetime = Field(description="Creation time (UTC ISO 8601)")
    changed: datetime = Field(description="Last modification time (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Standardized error envelope for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "Cannot create note",
            "request_id": "550e8400"
        }
    """
    error: str = Field(description="Machine-readable error category")
    message: str = Field(description="Generic human-readable message")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and state file status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    storage: str = Field(description="State file status: readable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
