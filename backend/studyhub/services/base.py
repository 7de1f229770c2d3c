"""Shared helpers for resource services."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from studyhub.exceptions import DatabaseError, PayloadTooLargeError

logger = logging.getLogger(__name__)

# Measured in UTF-8 bytes, not characters
MAX_CONTENT_BYTES = 100_000


def ensure_content_size(value: str | None, field: str, limit: int = MAX_CONTENT_BYTES) -> None:
    """Raise PayloadTooLargeError when value encodes to more than limit bytes."""
    if value is not None and len(value.encode("utf-8")) > limit:
        raise PayloadTooLargeError(field, limit)


@contextmanager
def storage_guard(action: str) -> Iterator[None]:
    """
    Map store failures to DatabaseError.

        with storage_guard("create note"):
            db.add(note)
            await db.commit()

    The driver error is logged here; the client only sees a generic message.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Database failure during %s: %s", action, exc)
        raise DatabaseError(context={"action": action}) from exc
