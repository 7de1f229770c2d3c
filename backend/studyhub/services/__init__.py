"""Resource services: business rules between the routes and the store."""

from studyhub.services import doubts, notes, timetable, users

__all__ = ["doubts", "notes", "timetable", "users"]
