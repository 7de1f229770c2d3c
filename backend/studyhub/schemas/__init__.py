"""Pydantic schemas for API request/response validation."""

from studyhub.schemas.base import Envelope
from studyhub.schemas.user import (
    AuthorSummary,
    Identity,
    IdentityResponse,
    UserCreate,
    UserLogin,
    UserRead,
)
from studyhub.schemas.auth import TokenResponse
from studyhub.schemas.notes import (
    NoteCreate,
    NoteListResponse,
    NoteRead,
    NoteResponse,
    NoteUpdate,
)
from studyhub.schemas.doubts import (
    AnswerCreate,
    AnswerRead,
    DoubtCreate,
    DoubtListResponse,
    DoubtRead,
    DoubtResponse,
    ResolveRequest,
)
from studyhub.schemas.timetable import (
    TimetableDay,
    TimetableRead,
    TimetableResponse,
    TimetableSlot,
    TimetableUpdate,
)

__all__ = [
    "Envelope",
    # User
    "AuthorSummary",
    "Identity",
    "IdentityResponse",
    "UserCreate",
    "UserLogin",
    "UserRead",
    # Auth
    "TokenResponse",
    # Notes
    "NoteCreate",
    "NoteListResponse",
    "NoteRead",
    "NoteResponse",
    "NoteUpdate",
    # Doubts
    "AnswerCreate",
    "AnswerRead",
    "DoubtCreate",
    "DoubtListResponse",
    "DoubtRead",
    "DoubtResponse",
    "ResolveRequest",
    # Timetable
    "TimetableDay",
    "TimetableRead",
    "TimetableResponse",
    "TimetableSlot",
    "TimetableUpdate",
]
