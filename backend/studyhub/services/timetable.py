"""
Timetable service.

Each user has at most one timetable, which moves through two states:

    absent --(first read or first write)--> present

The first read materializes an empty week. The unique constraint on user_id
settles concurrent first reads: the loser rolls back and re-reads the row
the winner created.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.db.models import Timetable, empty_week
from studyhub.schemas.timetable import TimetableUpdate
from studyhub.services.base import storage_guard

logger = logging.getLogger(__name__)


async def find_timetable(db: AsyncSession, owner_id: UUID) -> Timetable | None:
    with storage_guard("load timetable"):
        result = await db.execute(select(Timetable).where(Timetable.user_id == owner_id))
        return result.scalar_one_or_none()


async def get_or_create_timetable(db: AsyncSession, owner_id: UUID) -> Timetable:
    """Return the owner's timetable, creating an empty week on first access."""
    timetable = await find_timetable(db, owner_id)
    if timetable is not None:
        return timetable

    timetable = Timetable(user_id=owner_id, days=empty_week())
    with storage_guard("create timetable"):
        try:
            db.add(timetable)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            existing = await find_timetable(db, owner_id)
            if existing is None:
                raise
            return existing

    logger.info("Created timetable for %s", owner_id)
    return timetable


async def replace_timetable(db: AsyncSession, owner_id: UUID, data: TimetableUpdate) -> Timetable:
    """Replace the whole week, creating the timetable if it does not exist yet."""
    days = [entry.model_dump(mode="json", by_alias=True, exclude_none=True) for entry in data.days]

    timetable = await get_or_create_timetable(db, owner_id)
    timetable.days = days
    with storage_guard("replace timetable"):
        await db.commit()
        await db.refresh(timetable)
    return timetable
