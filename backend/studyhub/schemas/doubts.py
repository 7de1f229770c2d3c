"""Doubt (Q&A board) schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from studyhub.schemas.base import BaseSchema, Envelope
from studyhub.schemas.notes import TagList
from studyhub.schemas.user import AuthorSummary


class DoubtCreate(BaseSchema):
    """Schema for posting a doubt."""

    question: str = Field(..., min_length=1, max_length=500)
    description: str = ""
    tags: TagList = Field(default_factory=list)


class AnswerCreate(BaseSchema):
    """Schema for answering a doubt."""

    text: str = Field(..., min_length=1)


class ResolveRequest(BaseSchema):
    """Schema for setting a doubt's resolved state."""

    is_resolved: bool = True


class AnswerRead(BaseSchema):
    """Schema for reading an answer with its author."""

    id: UUID
    text: str
    user_id: UUID
    author: AuthorSummary | None = None
    created_at: datetime


class DoubtRead(BaseSchema):
    """Schema for reading a doubt with its answers."""

    id: UUID
    question: str
    description: str
    tags: list[str]
    is_resolved: bool
    user_id: UUID
    author: AuthorSummary | None = None
    answers: list[AnswerRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class DoubtResponse(Envelope):
    doubt: DoubtRead


class DoubtListResponse(Envelope):
    count: int
    doubts: list[DoubtRead]
