"""
[users] schemas.py

Defines Pydantic schemas for user profiles:
- UserRead: profile output
- UserUpdate: partial profile update (role and email are not editable)
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

from workhive.core.validators import normalize_skills, not_blank
from workhive.database.enums import UserRole


class UserRead(BaseModel):
    id: UUID
    email: EmailStr
    role: UserRole
    name: str
    phone: str | None = None
    address: str | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """
    Schema for updating user details.
    All fields are optional; unknown fields are rejected.
    Name and skills may be omitted but never set to null.
    """

    name: Annotated[str, AfterValidator(not_blank)] | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=2000)
    skills: Annotated[list[str], AfterValidator(normalize_skills)] | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        """
        Validates phone number contains only digits and is between 10–15 digits.
        """
        if value is None:
            return value
        digits = "".join(filter(str.isdigit, value))
        if len(digits) < 10 or len(digits) > 15:
            raise ValueError("Phone number must be between 10 and 15 digits.")
        return digits

    @model_validator(mode="after")
    def reject_nulls(self) -> "UserUpdate":
        for name in ("name", "skills"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"Field '{name}' cannot be null.")
        return self
