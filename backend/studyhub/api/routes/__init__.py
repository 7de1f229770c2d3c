"""API routes package."""

from studyhub.api.routes import (
    auth,
    doubts,
    notes,
    system,
    timetable,
)

__all__ = [
    "auth",
    "doubts",
    "notes",
    "system",
    "timetable",
]
