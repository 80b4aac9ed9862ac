"""
backend/workhive/invoice/schemas.py

Invoice Schemas
- InvoiceCreate: the assigned worker bills a job
- InvoiceStatusUpdate: client (or admin) marks an invoice paid or cancelled
- InvoiceRead: invoice details
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from workhive.core.validators import future_datetime, not_blank
from workhive.database.enums import InvoiceStatus


class InvoiceCreate(BaseModel):
    """Client and worker are taken from the job, never from the payload."""

    job_id: UUID = Field(..., description="Job being billed")
    amount: float = Field(..., gt=0, description="Amount due, must be positive")
    description: Annotated[str, AfterValidator(not_blank)] = Field(..., max_length=2000)
    due_date: Annotated[datetime, AfterValidator(future_datetime)] = Field(
        ..., description="Due date, must be in the future"
    )


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus = Field(..., description="paid or cancelled")

    @field_validator("status")
    @classmethod
    def must_leave_pending(cls, value: InvoiceStatus) -> InvoiceStatus:
        if value == InvoiceStatus.PENDING:
            raise ValueError("Status must be 'paid' or 'cancelled'.")
        return value


class InvoiceRead(BaseModel):
    id: UUID
    job_id: UUID
    client_id: UUID
    worker_id: UUID
    amount: float
    description: str
    status: InvoiceStatus
    due_date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
