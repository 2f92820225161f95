"""
Note management schemas.

Request bodies for note CRUD and sharing, and the note representation
returned to clients.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .common import CamelModel


def _require_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Field cannot be empty")
    return v


class NoteCreate(CamelModel):
    """Note creation request schema."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "Meeting Notes - Q4 Planning",
                "content": "1. Review Q3 performance\n2. Set Q4 objectives",
                "tags": ["meeting", "planning"],
            }
        },
    )

    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    tags: List[str] = Field(default_factory=list, description="Note tags")

    @field_validator("title", "content")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v)


class NoteUpdate(CamelModel):
    """Note update request schema. Owner and collaborators cannot be changed here."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    tags: Optional[List[str]] = Field(default=None, description="Note tags")

    @field_validator("title", "content")
    @classmethod
    def validate_text(cls, v: Optional[str]) -> Optional[str]:
        return _require_text(v)


class ShareNoteRequest(CamelModel):
    """Share a note with other users by email."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"emails": ["friend@example.com"]}},
    )

    emails: List[EmailStr] = Field(description="Emails of the users to share with")

    @field_validator("emails", mode="before")
    @classmethod
    def normalize_emails(cls, v):
        if isinstance(v, list):
            return [e.strip().lower() if isinstance(e, str) else e for e in v]
        return v


class NoteResponse(CamelModel):
    """Note response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    tags: List[str] = Field(description="Note tags")
    owner_id: uuid.UUID = Field(description="Note owner ID")
    shared_with: List[uuid.UUID] = Field(description="Users the note is shared with")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
