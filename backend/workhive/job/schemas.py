"""
backend/workhive/job/schemas.py

Job Schemas
Pydantic schemas for job-related operations:
- Job creation (Authenticated Client)
- Job content patch restricted to an explicit allow-list
- Cancellation payload
- Open-job filters
- Reading job details
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from workhive.core.validators import future_datetime, normalize_skills, not_blank
from workhive.database.enums import JobStatus

# ---------------------------------------------------
# Field Types
# ---------------------------------------------------
TitleStr = Annotated[str, AfterValidator(not_blank), Field(max_length=200)]
TextStr = Annotated[str, AfterValidator(not_blank), Field(max_length=5000)]
ShortStr = Annotated[str, AfterValidator(not_blank), Field(max_length=100)]
LocationStr = Annotated[str, AfterValidator(not_blank), Field(max_length=255)]
SkillList = Annotated[list[str], AfterValidator(normalize_skills)]
FutureDatetime = Annotated[datetime, AfterValidator(future_datetime)]


# ---------------------------------------------------
# Job Creation Schema (Authenticated Client)
# ---------------------------------------------------
class JobCreate(BaseModel):
    """Schema used when a client posts a new job."""

    title: TitleStr = Field(..., description="Short job title")
    description: TextStr = Field(..., description="Full description of the work")
    category: ShortStr = Field(..., description="Job category, matched exactly when filtering")
    budget: float = Field(..., gt=0, description="Offered budget, must be positive")
    location: LocationStr = Field(..., description="Where the work takes place")
    skills: SkillList = Field(default_factory=list, description="Required skills")
    deadline: FutureDatetime = Field(..., description="Deadline, must be in the future")


# ---------------------------------------------------
# Job Update Schema (Owning Client)
# ---------------------------------------------------
class JobUpdate(BaseModel):
    """
    Partial update of job content.

    Only the fields declared here can be patched; lifecycle fields such as
    status, client_id or worker_id are rejected as unknown.
    """

    title: TitleStr | None = None
    description: TextStr | None = None
    category: ShortStr | None = None
    budget: float | None = Field(default=None, gt=0)
    location: LocationStr | None = None
    skills: SkillList | None = None
    deadline: FutureDatetime | None = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def reject_nulls(self) -> "JobUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"Field '{name}' cannot be null.")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------
# Cancel Job Schema
# ---------------------------------------------------
class CancelJobRequest(BaseModel):
    """Schema used when a job is cancelled; the reason is optional."""

    cancel_reason: str | None = Field(
        default=None, max_length=1000, description="Reason provided for cancellation"
    )


# ---------------------------------------------------
# Open Job Filters
# ---------------------------------------------------
class JobFilters(BaseModel):
    """Optional filters for the open-job listing."""

    category: str | None = None
    location: str | None = None
    skills: list[str] = Field(default_factory=list, description="Matches any overlap")


# ---------------------------------------------------
# Job Read Schema
# ---------------------------------------------------
class JobRead(BaseModel):
    """Schema used to return job details."""

    id: UUID
    client_id: UUID
    worker_id: UUID | None = None
    title: str
    description: str
    category: str
    budget: float
    location: str
    skills: list[str]
    deadline: datetime
    status: JobStatus
    client_confirmed_completion: bool = False
    worker_confirmed_completion: bool = False
    cancel_reason: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
