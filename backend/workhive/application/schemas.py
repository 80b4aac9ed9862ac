"""
backend/workhive/application/schemas.py

Application Schemas
- ApplicationCreate: worker bids on a job with a cover letter
- ApplicationDecision: client accepts or rejects (pending is not a decision)
- ApplicationRead: application details
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from workhive.core.validators import not_blank
from workhive.database.enums import ApplicationStatus


class ApplicationCreate(BaseModel):
    """Schema used when a worker applies to a job."""

    job_id: UUID = Field(..., description="Job being applied to")
    cover_letter: Annotated[str, AfterValidator(not_blank)] = Field(
        ..., max_length=5000, description="Cover letter, must not be blank"
    )


class ApplicationDecision(BaseModel):
    """Schema used when the owning client decides on an application."""

    status: ApplicationStatus = Field(..., description="accepted or rejected")

    @field_validator("status")
    @classmethod
    def must_be_decision(cls, value: ApplicationStatus) -> ApplicationStatus:
        if value == ApplicationStatus.PENDING:
            raise ValueError("Decision must be 'accepted' or 'rejected'.")
        return value


class ApplicationRead(BaseModel):
    id: UUID
    job_id: UUID
    worker_id: UUID
    cover_letter: str
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
