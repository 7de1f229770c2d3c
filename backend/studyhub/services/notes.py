"""
Notes service.

Notes are owner-private: every lookup is scoped by user_id at the SQL level,
so a note owned by someone else is indistinguishable from a missing one.
"""

import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.db.models import Note
from studyhub.exceptions import NotFoundError, ValidationError
from studyhub.schemas.notes import NoteCreate, NoteUpdate
from studyhub.services.base import ensure_content_size, storage_guard

logger = logging.getLogger(__name__)


async def list_notes(db: AsyncSession, owner_id: UUID, q: str | None = None) -> list[Note]:
    """
    List the owner's notes, most recently updated first.

    q: case-insensitive search in title and content
    """
    query = select(Note).where(Note.user_id == owner_id)
    if q:
        search_pattern = f"%{q}%"
        query = query.where(
            or_(
                Note.title.ilike(search_pattern),
                Note.content.ilike(search_pattern),
            )
        )
    query = query.order_by(Note.updated_at.desc())

    with storage_guard("list notes"):
        result = await db.execute(query)
        return list(result.scalars())


async def get_note(db: AsyncSession, note_id: UUID, owner_id: UUID) -> Note:
    with storage_guard("load note"):
        result = await db.execute(
            select(Note).where(Note.id == note_id, Note.user_id == owner_id)
        )
        note = result.scalar_one_or_none()
    if note is None:
        raise NotFoundError("Note", note_id)
    return note


async def create_note(db: AsyncSession, owner_id: UUID, data: NoteCreate) -> Note:
    ensure_content_size(data.content, "content")

    note = Note(user_id=owner_id, **data.model_dump())
    with storage_guard("create note"):
        db.add(note)
        await db.commit()
        await db.refresh(note)
    logger.debug("Created note %s for %s", note.id, owner_id)
    return note


async def update_note(db: AsyncSession, note_id: UUID, owner_id: UUID, data: NoteUpdate) -> Note:
    """Apply the fields present in data. Missing or foreign notes raise 404."""
    changes = data.model_dump(exclude_unset=True)
    if "title" in changes and changes["title"] is None:
        raise ValidationError("Title is required", field="title")
    ensure_content_size(changes.get("content"), "content")

    note = await get_note(db, note_id, owner_id)
    for key, value in changes.items():
        if value is None:
            value = [] if key == "tags" else ""
        setattr(note, key, value)

    with storage_guard("update note"):
        await db.commit()
        await db.refresh(note)
    return note


async def delete_note(db: AsyncSession, note_id: UUID, owner_id: UUID) -> None:
    note = await get_note(db, note_id, owner_id)
    with storage_guard("delete note"):
        await db.delete(note)
        await db.commit()
    logger.debug("Deleted note %s for %s", note_id, owner_id)
