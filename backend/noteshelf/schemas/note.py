"""
NoteShelf Backend — Pydantic Response Schemas
===============================================

What:  Pydantic models defining what the API returns to clients.
How:   FastAPI serializes these (by alias, so fields go out camelCased) and
       generates the OpenAPI document from them.

Schemas are separate from the stored record models because the API shape
differs from the file shape: the storage key is never exposed, and every
note gains a `secondaryContent` alias of its description for older clients.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from noteshelf.models.note import Note


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  A note as clients see it.
    Who:   Returned by every /api/notes endpoint, singly or in an array.

    Extra keys a note inherited from the template are passed through.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, description="Unique note identifier")
    title: str = Field(description="Display title")
    description: str = Field(default="", description="Short free-text description")
    content: str = Field(default="", description="Note body")
    updated_at: Optional[str] = Field(
        default=None,
        alias="updatedAt",
        description="Time of the last write (UTC ISO 8601)",
    )
    secondary_content: str = Field(
        default="",
        alias="secondaryContent",
        description="Same value as description; kept for client compatibility",
    )

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        record = note.to_record()
        record["secondaryContent"] = note.description or ""
        return cls.model_validate(record)


class ErrorResponse(BaseModel):
    """
    What:  Error body for every failed API call.

    Example:
        {"message": "Note not found."}

    The request id travels in the X-Request-ID response header.
    """

    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and storage status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    storage: str = Field(description="Notes directory status: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
