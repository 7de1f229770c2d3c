"""Note schemas."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, Field

from studyhub.schemas.base import BaseSchema, Envelope


def _clean_tags(tags: list[str]) -> list[str]:
    """Strip tags and drop blanks, keeping order."""
    return [tag.strip() for tag in tags if tag.strip()]


TagList = Annotated[list[str], AfterValidator(_clean_tags)]


class NoteBase(BaseSchema):
    """Base note schema."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    tags: TagList = Field(default_factory=list)


class NoteCreate(NoteBase):
    """Schema for creating a note."""


class NoteRead(NoteBase):
    """Schema for reading note data."""

    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class NoteUpdate(BaseSchema):
    """Schema for updating a note. All fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = None
    tags: TagList | None = None


class NoteResponse(Envelope):
    note: NoteRead


class NoteListResponse(Envelope):
    count: int
    notes: list[NoteRead]
