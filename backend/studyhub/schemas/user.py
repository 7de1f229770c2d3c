"""User and identity schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import EmailStr, Field

from studyhub.db.models import User
from studyhub.schemas.base import BaseSchema, Envelope

PLACEHOLDER_USER_ID = UUID(int=0)


class UserCreate(BaseSchema):
    """Schema for registering an account."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["student", "teacher"] = "student"


class UserLogin(BaseSchema):
    """Schema for logging in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserRead(BaseSchema):
    """Schema for reading user data. Never includes the password hash."""

    id: UUID
    name: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class Identity(BaseSchema):
    """
    The caller attached to an authenticated request.

    Built one of three ways:
    - from_user: token verified and a user record backs it
    - from_subject: token verified but no record was found (trusted anyway)
    - placeholder: bypass mode, no verification at all
    """

    id: UUID
    name: str | None = None
    email: str | None = None
    role: str | None = None
    has_record: bool = False

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role, has_record=True)

    @classmethod
    def from_subject(cls, user_id: UUID) -> "Identity":
        return cls(id=user_id)

    @classmethod
    def placeholder(cls) -> "Identity":
        return cls(
            id=PLACEHOLDER_USER_ID,
            name="Open User",
            email="open@studyhub.dev",
            role="developer",
        )


class AuthorSummary(BaseSchema):
    """Public view of a record's author."""

    id: UUID
    name: str | None = None


class IdentityResponse(Envelope):
    user: Identity
