"""
FastAPI Dependencies for Authentication.

Key patterns:
1. get_current_identity: Extracts and validates the bearer JWT, returns an Identity
2. Owner-scoped queries: services take the caller's id and filter on it
3. No global "current user" state - always pass the identity explicitly

Security model:
- JWT sent in the Authorization header as "Bearer <token>"
- A verified token is trusted even when no user record backs its subject
- Bypass mode (DISABLE_AUTH) skips verification entirely; development only
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.config import AuthMode, get_settings
from studyhub.db.session import get_db
from studyhub.exceptions import AuthenticationError, ConfigurationError, DatabaseError
from studyhub.schemas.user import Identity
from studyhub.services.users import get_user

logger = logging.getLogger(__name__)


# =============================================================================
# JWT UTILITIES
# =============================================================================


def require_jwt_secret() -> str:
    """Return the signing secret, or raise ConfigurationError when it is unset."""
    secret = get_settings().jwt_secret
    if not secret:
        raise ConfigurationError("Server misconfiguration: JWT secret is not set")
    return secret


def create_access_token(user_id: UUID) -> str:
    """
    Create a JWT access token for a user.

    Token payload contains:
    - sub: user_id as string (standard JWT subject claim)
    - exp: expiration timestamp

    Raises ConfigurationError when no signing secret is configured.
    """
    settings = get_settings()
    secret = require_jwt_secret()

    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    payload = {
        "sub": str(user_id),
        "exp": expire,
    }
    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID | None:
    """
    Decode and validate a JWT access token.

    Returns user_id if valid, None if invalid/expired/malformed.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
        user_id_str = payload.get("sub")
        if user_id_str is None:
            return None
        return UUID(str(user_id_str))
    except (JWTError, ValueError):
        return None


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an 'Authorization: Bearer <token>' header value."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


# =============================================================================
# AUTHENTICATION DEPENDENCIES
# =============================================================================


async def resolve_identity(db: AsyncSession, user_id: UUID) -> Identity:
    """Full identity when a record exists, otherwise just the verified id."""
    try:
        user = await get_user(db, user_id)
    except DatabaseError:
        logger.warning("User lookup failed for %s; using token subject only", user_id)
        return Identity.from_subject(user_id)
    if user is None:
        return Identity.from_subject(user_id)
    return Identity.from_user(user)


async def get_current_identity(
    db: Annotated[AsyncSession, Depends(get_db)],
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """
    Authenticate the request and return the caller's identity.

    Use it in route handlers:

        @router.get("/notes")
        async def list_notes(identity: CurrentIdentity):
            ...

    Raises:
    - 401 if the token is missing, invalid, or expired
    - 500 if no signing secret is configured
    - 401 "Authentication failed" for anything unexpected along the way
    """
    settings = get_settings()
    if settings.auth_mode is AuthMode.BYPASS:
        return Identity.placeholder()

    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("No token, authorization denied")

    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured; rejecting authenticated request")
        raise ConfigurationError("Server misconfiguration: JWT secret is not set")

    try:
        user_id = decode_access_token(token)
        if user_id is not None:
            return await resolve_identity(db, user_id)
    except Exception:
        logger.exception("Unexpected error while authenticating request")
        raise AuthenticationError("Authentication failed")

    raise AuthenticationError("Token is not valid")


# Type alias for dependency injection
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
