"""Timetable schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field, model_validator

from studyhub.db.models import WEEKDAYS, Weekday
from studyhub.schemas.base import BaseSchema, Envelope


class TimetableSlot(BaseSchema):
    """A single scheduled block. Unknown keys are kept as sent."""

    model_config = ConfigDict(extra="allow")

    subject: str = Field(..., min_length=1, max_length=255)
    start_time: str | None = None
    end_time: str | None = None
    location: str | None = None
    notes: str | None = None


class TimetableDay(BaseSchema):
    """One weekday and its slots, in order."""

    day: Weekday
    slots: list[TimetableSlot] = Field(default_factory=list)


class TimetableUpdate(BaseSchema):
    """Schema for replacing a timetable.

    Requires all seven days, Monday first.
    """

    days: list[TimetableDay]

    @model_validator(mode="after")
    def validate_week(self) -> "TimetableUpdate":
        """Ensure exactly seven days in Monday..Sunday order."""
        if [entry.day.value for entry in self.days] != WEEKDAYS:
            raise ValueError("days must list Monday through Sunday exactly once, in order")
        return self


class TimetableRead(BaseSchema):
    """Schema for reading a timetable."""

    id: UUID
    user_id: UUID
    days: list[TimetableDay]
    created_at: datetime
    updated_at: datetime


class TimetableResponse(Envelope):
    timetable: TimetableRead
