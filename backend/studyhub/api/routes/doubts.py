"""Doubts (Q&A board) routes.

Listing and reading are public; posting, answering and resolving
require authentication.
"""

from uuid import UUID

from fastapi import APIRouter, status

from studyhub.api.deps import CurrentIdentity, DbSession
from studyhub.schemas.doubts import (
    AnswerCreate,
    DoubtCreate,
    DoubtListResponse,
    DoubtResponse,
    ResolveRequest,
)
from studyhub.services import doubts as doubt_service

router = APIRouter(prefix="/api/doubts", tags=["doubts"])


@router.get("", response_model=DoubtListResponse)
async def list_doubts(
    db: DbSession,
    resolved: bool | None = None,
) -> DoubtListResponse:
    """
    List all doubts, newest first.

    Filters:
    - resolved: Only resolved (true) or open (false) doubts
    """
    doubts = await doubt_service.list_doubts(db, resolved=resolved)
    reads = await doubt_service.to_read_models(db, doubts)
    return DoubtListResponse(count=len(reads), doubts=reads)


@router.get("/{doubt_id}", response_model=DoubtResponse)
async def get_doubt(doubt_id: UUID, db: DbSession) -> DoubtResponse:
    """Get a single doubt with its answers."""
    doubt = await doubt_service.get_doubt(db, doubt_id)
    [read] = await doubt_service.to_read_models(db, [doubt])
    return DoubtResponse(doubt=read)


@router.post("", response_model=DoubtResponse, status_code=status.HTTP_201_CREATED)
async def create_doubt(
    data: DoubtCreate,
    identity: CurrentIdentity,
    db: DbSession,
) -> DoubtResponse:
    """Post a new doubt."""
    doubt = await doubt_service.create_doubt(db, identity.id, data)
    [read] = await doubt_service.to_read_models(db, [doubt])
    return DoubtResponse(message="Doubt posted", doubt=read)


@router.post("/{doubt_id}/answers", response_model=DoubtResponse, status_code=status.HTTP_201_CREATED)
async def add_answer(
    doubt_id: UUID,
    data: AnswerCreate,
    identity: CurrentIdentity,
    db: DbSession,
) -> DoubtResponse:
    """Answer a doubt. Any authenticated user may answer."""
    doubt = await doubt_service.add_answer(db, doubt_id, identity.id, data)
    [read] = await doubt_service.to_read_models(db, [doubt])
    return DoubtResponse(message="Answer added", doubt=read)


@router.put("/{doubt_id}/resolve", response_model=DoubtResponse)
async def resolve_doubt(
    doubt_id: UUID,
    data: ResolveRequest,
    identity: CurrentIdentity,
    db: DbSession,
) -> DoubtResponse:
    """Mark a doubt resolved or open again. Author only."""
    doubt = await doubt_service.set_resolved(db, doubt_id, identity.id, data.is_resolved)
    [read] = await doubt_service.to_read_models(db, [doubt])
    return DoubtResponse(
        message="Doubt marked as resolved" if read.is_resolved else "Doubt marked as open",
        doubt=read,
    )
