"""
QuickNotes Backend — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the API contract between client and backend.
How:   FastAPI uses these models to parse request bodies, serialize
       responses, and generate the OpenAPI document.

Schemas are separate from the SQLAlchemy model: the API never exposes more
than {id, title, content, created_at}.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from quicknotes.exceptions import ValidationError


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NotePayload(BaseModel):
    """
    What:  Body of POST /api/notes and PUT /api/notes/{id}.

    Rules:
        - content: absent or null becomes "" (never stored as NULL)
        - title: parsed leniently here so a missing or blank title reaches
          the service layer, which rejects it with a 400 through
          `require_title()` before touching the store
    """
    title: Optional[str] = Field(default=None, description="Note title (required, non-blank)")
    content: str = Field(default="", description="Note body; defaults to empty string")

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    def require_title(self) -> str:
        """Return the title, or raise ValidationError if it is missing or blank."""
        if self.title is None or not self.title.strip():
            raise ValidationError(message="Title is required", field="title")
        return self.title


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by every note endpoint (single object or list items).
    """
    id: int = Field(description="Note identifier assigned by the store")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (ISO 8601)")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Plain confirmation returned by DELETE /api/notes/{id}."""
    message: str


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Note not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Liveness payload returned by GET /api/health.

    `database` is informational: the probe always answers 200 while the
    process is serving.
    """
    status: str = Field(description="Always 'ok' while the process serves requests")
    message: str = Field(description="Human-readable liveness message")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
