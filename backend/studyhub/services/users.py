"""Identity store: registration, login and user lookup."""

import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from studyhub.db.models import User
from studyhub.exceptions import AuthenticationError, ConflictError
from studyhub.schemas.user import AuthorSummary, UserCreate
from studyhub.services.base import storage_guard
from studyhub.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: UUID) -> User | None:
    with storage_guard("load user"):
        return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    with storage_guard("load user by email"):
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()


async def register_user(db: AsyncSession, data: UserCreate) -> User:
    """Create an account. Emails are unique, compared case-insensitively."""
    email = data.email.lower()
    if await get_user_by_email(db, email) is not None:
        raise ConflictError("User already exists")

    # bcrypt is CPU-bound; hashing runs off the event loop
    password_hash = await run_in_threadpool(hash_password, data.password)
    user = User(
        name=data.name,
        email=email,
        password_hash=password_hash,
        role=data.role,
    )
    with storage_guard("register user"):
        try:
            db.add(user)
            await db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email
            await db.rollback()
            raise ConflictError("User already exists") from exc

    logger.info("Registered user %s", user.id)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    """Return the user for valid credentials, else raise AuthenticationError."""
    user = await get_user_by_email(db, email)
    if user is None or not await run_in_threadpool(verify_password, password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    return user


async def get_author_summaries(
    db: AsyncSession, user_ids: Iterable[UUID]
) -> dict[UUID, AuthorSummary]:
    """
    Resolve author ids to public summaries with a single query.

    Ids without a user record map to a summary with no name.
    """
    ids = set(user_ids)
    if not ids:
        return {}
    with storage_guard("load authors"):
        result = await db.execute(select(User.id, User.name).where(User.id.in_(list(ids))))
        names = {row.id: row.name for row in result}
    return {user_id: AuthorSummary(id=user_id, name=names.get(user_id)) for user_id in ids}
