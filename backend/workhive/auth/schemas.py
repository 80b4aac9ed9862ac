"""
auth/schemas.py

Defines Pydantic models for authentication flows:
- Login & signup request payloads
- JWT token payload and response structure
- Authenticated user response schema
- Actor: the {id, email, role} descriptor handed to every service
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

from workhive.core.validators import not_blank, password_validator
from workhive.database.enums import UserRole


# --------------------------------------------------
# Custom Types
# --------------------------------------------------
PasswordStr = Annotated[str, AfterValidator(password_validator)]


# --------------------------------------------------
# ACTOR
# --------------------------------------------------
class Actor(BaseModel):
    """
    Authenticated identity performing an operation.
    """

    id: UUID
    email: EmailStr
    role: UserRole

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


# --------------------------------------------------
# AUTH REQUEST SCHEMAS
# --------------------------------------------------
class LoginRequest(BaseModel):
    """
    Request schema for user login using JSON payload.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, max_length=128, description="Account password")


class SignupRequest(BaseModel):
    """
    Request schema for new user registration.
    Admin accounts are provisioned out of band and cannot sign up.
    """

    email: EmailStr = Field(..., description="Email address for new account")
    password: PasswordStr = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password must include uppercase, lowercase, digit, special character, and only ASCII characters.",
    )
    name: Annotated[str, AfterValidator(not_blank)] = Field(
        ..., max_length=100, description="Display name"
    )
    role: UserRole = Field(..., description="User role: client or worker")

    @field_validator("role")
    @classmethod
    def reject_admin_signup(cls, role: UserRole) -> UserRole:
        if role == UserRole.ADMIN:
            raise ValueError("Admin accounts cannot be created through signup.")
        return role


# --------------------------------------------------
# AUTH TOKEN SCHEMAS
# --------------------------------------------------
class TokenPayload(BaseModel):
    """
    Claims carried by an access token.
    """

    sub: UUID = Field(..., description="User ID")
    email: EmailStr
    role: UserRole
    exp: int = Field(..., description="Expiry as a UNIX timestamp")
    jti: str = Field(..., description="Unique token identifier used for blacklisting")


class AuthUserResponse(BaseModel):
    """
    User details returned alongside an access token.
    """

    id: UUID
    email: EmailStr
    name: str
    role: UserRole
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthSuccessResponse(BaseModel):
    """
    Response returned after a successful login.
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Type of the token")
    user: AuthUserResponse
