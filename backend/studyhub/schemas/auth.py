"""Authentication schemas."""

from pydantic import Field

from studyhub.schemas.base import Envelope
from studyhub.schemas.user import UserRead


class TokenResponse(Envelope):
    """Response schema for successful registration or login."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token expiry in seconds")
    user: UserRead
