"""
backend/workhive/database/models.py

Core SQLAlchemy ORM Models

Defines:
- User: Authenticated user accounts with role-based access

Importing this module registers every ORM model on the shared metadata:
- Job (jobs posted by clients)
- Application (worker bids on jobs)
- Invoice (billing records for jobs)
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Enum, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from workhive.database.base import Base, utcnow
from workhive.database.enums import UserRole, enum_values
from workhive.job.models import Job
from workhive.application.models import Application
from workhive.invoice.models import Invoice

__all__ = ["User", "Job", "Application", "Invoice"]


# ---------------------------------------------------
# User Model: Authenticated Platform User
# ---------------------------------------------------
class User(Base):
    __tablename__ = "users"

    # -------------------------------------
    # Fields
    # -------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the user",
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, comment="User's email address"
    )
    hashed_password: Mapped[str] = mapped_column(
        String, nullable=False, comment="Hashed password for authentication"
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        comment="User role (client, worker, admin); immutable after creation",
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="Display name")
    phone: Mapped[str | None] = mapped_column(
        String(20), nullable=True, comment="User's phone number (optional)"
    )
    address: Mapped[str | None] = mapped_column(
        String(255), nullable=True, comment="User's address (optional)"
    )
    bio: Mapped[str | None] = mapped_column(Text, nullable=True, comment="Short biography")
    skills: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list, comment="Skills advertised by the user"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, comment="Whether the user account is active"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        comment="Timestamp when the user was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        comment="Timestamp when the user was last updated",
    )
