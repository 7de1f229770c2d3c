"""Notes CRUD routes."""

from uuid import UUID

from fastapi import APIRouter, status

from studyhub.api.deps import CurrentIdentity, DbSession
from studyhub.schemas.base import Envelope
from studyhub.schemas.notes import (
    NoteCreate,
    NoteListResponse,
    NoteRead,
    NoteResponse,
    NoteUpdate,
)
from studyhub.services import notes as note_service

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("", response_model=NoteListResponse)
async def list_notes(
    identity: CurrentIdentity,
    db: DbSession,
    q: str | None = None,
) -> NoteListResponse:
    """
    List notes for the current user, most recently updated first.

    Filters:
    - q: Search in title and content
    """
    notes = await note_service.list_notes(db, identity.id, q=q)
    return NoteListResponse(
        count=len(notes),
        notes=[NoteRead.model_validate(n) for n in notes],
    )


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    data: NoteCreate,
    identity: CurrentIdentity,
    db: DbSession,
) -> NoteResponse:
    """Create a new note."""
    note = await note_service.create_note(db, identity.id, data)
    return NoteResponse(message="Note created", note=NoteRead.model_validate(note))


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    identity: CurrentIdentity,
    db: DbSession,
) -> NoteResponse:
    """Get a specific note by ID."""
    note = await note_service.get_note(db, note_id, identity.id)
    return NoteResponse(note=NoteRead.model_validate(note))


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    data: NoteUpdate,
    identity: CurrentIdentity,
    db: DbSession,
) -> NoteResponse:
    """Update a note."""
    note = await note_service.update_note(db, note_id, identity.id, data)
    return NoteResponse(message="Note updated", note=NoteRead.model_validate(note))


@router.delete("/{note_id}", response_model=Envelope)
async def delete_note(
    note_id: UUID,
    identity: CurrentIdentity,
    db: DbSession,
) -> Envelope:
    """Delete a note."""
    await note_service.delete_note(db, note_id, identity.id)
    return Envelope(message="Note deleted")
