"""
Authentication Routes

Endpoints:
- POST /api/auth/register - Create an account and return a session JWT
- POST /api/auth/login    - Exchange email + password for a session JWT
- GET  /api/auth/me       - Get the current caller's identity

The JWT is returned in the response body; clients send it back as
'Authorization: Bearer <token>'.
"""

from fastapi import APIRouter, status

from studyhub.api.deps import CurrentIdentity, DbSession, create_access_token, require_jwt_secret
from studyhub.config import get_settings
from studyhub.db.models import User
from studyhub.schemas.auth import TokenResponse
from studyhub.schemas.user import IdentityResponse, UserCreate, UserLogin, UserRead
from studyhub.services import users

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(user: User, message: str) -> TokenResponse:
    settings = get_settings()
    return TokenResponse(
        message=message,
        token=create_access_token(user.id),
        expires_in=settings.jwt_expire_minutes * 60,
        user=UserRead.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, db: DbSession) -> TokenResponse:
    """Register a new account. Emails are unique (409 on duplicates)."""
    # Nothing is stored if a token could not be issued afterwards
    require_jwt_secret()
    user = await users.register_user(db, data)
    return _token_response(user, "User registered successfully")


@router.post("/login", response_model=TokenResponse)
async def login(data: UserLogin, db: DbSession) -> TokenResponse:
    """Log in with email and password."""
    user = await users.authenticate_user(db, data.email, data.password)
    return _token_response(user, "Login successful")


@router.get("/me", response_model=IdentityResponse)
async def get_me(identity: CurrentIdentity) -> IdentityResponse:
    """
    Get the current caller's identity.

    Useful for checking whether a stored token is still valid.
    """
    return IdentityResponse(user=identity)
