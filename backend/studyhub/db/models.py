"""
SQLAlchemy 2.0 Models for StudyHub.

Uses modern declarative syntax with Mapped[] type annotations.
All models use UUID primary keys.

Owner references (user_id) are indexed plain columns rather than foreign
keys: a verified token is trusted even when no user record backs it, so
records may be owned by identities that were never registered here.
Ordered list fields (tags, timetable days) are stored as JSON documents.
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================


class UserRole(str, PyEnum):
    """Role of a registered account."""

    STUDENT = "student"
    TEACHER = "teacher"


class Weekday(str, PyEnum):
    """Timetable days, in display order."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


WEEKDAYS: list[str] = [day.value for day in Weekday]


# =============================================================================
# MODELS
# =============================================================================


class User(Base):
    """Registered account. Never deleted by the API."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default=UserRole.STUDENT.value)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


class Note(Base):
    """Private note. Readable and writable only by its owner."""

    __tablename__ = "notes"
    __table_args__ = (Index("idx_notes_user_updated_at", "user_id", "updated_at"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


class Doubt(Base):
    """
    Public question on the Q&A board.

    Anyone may read it and any authenticated user may answer it;
    only the author may change its resolved state.
    """

    __tablename__ = "doubts"
    __table_args__ = (Index("idx_doubts_created_at", "created_at"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    question: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_resolved: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    # Relationships
    # selectin: async sessions cannot lazy-load on attribute access
    answers: Mapped[list["Answer"]] = relationship(
        "Answer",
        back_populates="doubt",
        cascade="all, delete-orphan",
        order_by="Answer.created_at",
        lazy="selectin",
    )


class Answer(Base):
    """Answer appended to a doubt."""

    __tablename__ = "doubt_answers"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    doubt_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("doubts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    # Relationships
    doubt: Mapped["Doubt"] = relationship("Doubt", back_populates="answers")


class Timetable(Base):
    """
    Weekly timetable (one per user).

    days holds exactly seven entries, Monday first:
        [{"day": "Monday", "slots": [...]}, ...]
    """

    __tablename__ = "timetables"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, unique=True)
    days: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


def empty_week() -> list[dict[str, Any]]:
    """Seven weekday entries with no slots."""
    return [{"day": day, "slots": []} for day in WEEKDAYS]
