"""Timetable routes (one timetable per user)."""

from fastapi import APIRouter

from studyhub.api.deps import CurrentIdentity, DbSession
from studyhub.schemas.timetable import TimetableRead, TimetableResponse, TimetableUpdate
from studyhub.services import timetable as timetable_service

router = APIRouter(prefix="/api/timetable", tags=["timetable"])


@router.get("", response_model=TimetableResponse)
async def get_timetable(identity: CurrentIdentity, db: DbSession) -> TimetableResponse:
    """
    Get the caller's timetable.

    The first call creates and stores an empty week (seven days, no slots).
    """
    timetable = await timetable_service.get_or_create_timetable(db, identity.id)
    return TimetableResponse(timetable=TimetableRead.model_validate(timetable))


@router.post("", response_model=TimetableResponse)
async def save_timetable(
    data: TimetableUpdate,
    identity: CurrentIdentity,
    db: DbSession,
) -> TimetableResponse:
    """Replace the caller's whole week."""
    timetable = await timetable_service.replace_timetable(db, identity.id, data)
    return TimetableResponse(
        message="Timetable saved",
        timetable=TimetableRead.model_validate(timetable),
    )
