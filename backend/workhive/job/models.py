"""
job/models.py

Defines the Job model.
- Represents tasks posted by clients and performed by workers
- Tracks status transitions, assignment, completion confirmations and
  lifecycle timestamps
- Carries a version counter used for compare-and-set transitions
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from workhive.database.base import Base, utcnow
from workhive.database.enums import JobStatus, enum_values


# MODEL: Job
class Job(Base):
    __tablename__ = "jobs"

    # Basic Identifiers & Foreign Keys
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the job",
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", name="fk_jobs_client_id"),
        nullable=False,
        index=True,
        comment="Client who posted the job",
    )
    worker_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", name="fk_jobs_worker_id"),
        nullable=True,
        index=True,
        comment="Worker assigned to the job; null while open",
    )

    # Content
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    budget: Mapped[float] = mapped_column(Float, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    skills: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list, comment="Skills required for the job"
    )
    deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Job Status & Lifecycle
    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, name="job_status", values_callable=enum_values),
        default=JobStatus.OPEN,
        nullable=False,
        index=True,
        comment="Current status of the job",
    )
    client_confirmed_completion: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    worker_confirmed_completion: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Timestamp when a worker was assigned"
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Timestamp when the job was completed"
    )
    cancelled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Timestamp when the job was cancelled"
    )
    cancel_reason: Mapped[str | None] = mapped_column(
        Text, nullable=True, comment="Reason provided for job cancellation"
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, comment="Incremented on every write"
    )

    # Audit Fields
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Timestamp when the job was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        comment="Timestamp when the job was last updated",
    )
