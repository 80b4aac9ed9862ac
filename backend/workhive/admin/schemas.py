"""
admin/schemas.py

Defines response schemas for admin listings:
- Users, jobs and applications as seen by the admin console
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from workhive.database.enums import ApplicationStatus, JobStatus, UserRole


# -----------------------------------------------------
# Admin User View
# -----------------------------------------------------
class AdminUserView(BaseModel):
    id: UUID
    email: EmailStr
    name: str
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# -----------------------------------------------------
# Admin Job View
# -----------------------------------------------------
class AdminJobView(BaseModel):
    id: UUID
    title: str
    category: str
    budget: float
    status: JobStatus
    client_id: UUID
    worker_id: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# -----------------------------------------------------
# Admin Application View
# -----------------------------------------------------
class AdminApplicationView(BaseModel):
    """
    Application with the job title and worker name it was searched by.
    """

    id: UUID
    job_id: UUID
    worker_id: UUID
    status: ApplicationStatus
    job_title: str = Field(..., description="Title of the job applied to")
    worker_name: str = Field(..., description="Name of the applying worker")
    created_at: datetime
