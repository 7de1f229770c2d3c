"""
Doubts (Q&A board) service.

Doubts are public: anyone can list them and any authenticated user can
answer one. Only the author may toggle the resolved flag, and unlike notes
a foreign doubt is reported as 403 rather than hidden behind a 404.
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.db.models import Answer, Doubt
from studyhub.exceptions import ForbiddenError, NotFoundError
from studyhub.schemas.doubts import AnswerCreate, DoubtCreate, DoubtRead
from studyhub.services.base import ensure_content_size, storage_guard
from studyhub.services.users import get_author_summaries

logger = logging.getLogger(__name__)


async def list_doubts(db: AsyncSession, resolved: bool | None = None) -> list[Doubt]:
    """All doubts, newest first. Answers come oldest first."""
    query = select(Doubt)
    if resolved is not None:
        query = query.where(Doubt.is_resolved == resolved)
    query = query.order_by(Doubt.created_at.desc())

    with storage_guard("list doubts"):
        result = await db.execute(query)
        return list(result.scalars())


async def get_doubt(db: AsyncSession, doubt_id: UUID) -> Doubt:
    with storage_guard("load doubt"):
        result = await db.execute(select(Doubt).where(Doubt.id == doubt_id))
        doubt = result.scalar_one_or_none()
    if doubt is None:
        raise NotFoundError("Doubt", doubt_id)
    return doubt


async def create_doubt(db: AsyncSession, owner_id: UUID, data: DoubtCreate) -> Doubt:
    ensure_content_size(data.question, "question")
    ensure_content_size(data.description, "description")

    doubt = Doubt(user_id=owner_id, answers=[], **data.model_dump())
    with storage_guard("create doubt"):
        db.add(doubt)
        await db.commit()
    logger.debug("Created doubt %s for %s", doubt.id, owner_id)
    return doubt


async def add_answer(db: AsyncSession, doubt_id: UUID, author_id: UUID, data: AnswerCreate) -> Doubt:
    """Append an answer. Any authenticated caller may answer any doubt."""
    ensure_content_size(data.text, "text")

    doubt = await get_doubt(db, doubt_id)
    doubt.answers.append(Answer(user_id=author_id, text=data.text))
    with storage_guard("add answer"):
        await db.commit()
    return doubt


async def set_resolved(db: AsyncSession, doubt_id: UUID, caller_id: UUID, is_resolved: bool) -> Doubt:
    """
    Set the resolved flag. Only the author may do this.

    Setting the current value again is a no-op that still succeeds.
    """
    doubt = await get_doubt(db, doubt_id)
    if doubt.user_id != caller_id:
        raise ForbiddenError("Only the author can change the resolved state of this doubt")

    if doubt.is_resolved != is_resolved:
        doubt.is_resolved = is_resolved
        with storage_guard("resolve doubt"):
            await db.commit()
    return doubt


async def to_read_models(db: AsyncSession, doubts: Sequence[Doubt]) -> list[DoubtRead]:
    """Serialize doubts with doubt and answer authors populated."""
    author_ids = {d.user_id for d in doubts}
    author_ids.update(a.user_id for d in doubts for a in d.answers)
    authors = await get_author_summaries(db, author_ids)

    reads = []
    for doubt in doubts:
        read = DoubtRead.model_validate(doubt)
        read.author = authors.get(doubt.user_id)
        for answer in read.answers:
            answer.author = authors.get(answer.user_id)
        reads.append(read)
    return reads
