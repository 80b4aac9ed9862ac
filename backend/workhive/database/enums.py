"""
backend/workhive/database/enums.py

Enumerations

Defines enumerations used across the platform:
- UserRole: Roles assigned to users (client, worker, admin)
- JobStatus: Lifecycle states of a job
- ApplicationStatus: Lifecycle states of an application
- InvoiceStatus: Billing states of an invoice
"""

from enum import Enum


# ---------------------------------------------------
# User Role Enumeration
# ---------------------------------------------------
class UserRole(str, Enum):
    """
    Enum representing user roles for access control.
    A user's role is fixed at registration.
    """

    CLIENT = "client"
    WORKER = "worker"
    ADMIN = "admin"


# ---------------------------------------------------
# Job Status Enumeration
# ---------------------------------------------------
class JobStatus(str, Enum):
    """
    open -> in_progress -> completed, cancelled from open or in_progress.
    """

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_JOB_STATUSES


TERMINAL_JOB_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.CANCELLED})


# ---------------------------------------------------
# Application Status Enumeration
# ---------------------------------------------------
class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# ---------------------------------------------------
# Invoice Status Enumeration
# ---------------------------------------------------
class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum members by value rather than by name."""
    return [member.value for member in enum_cls]
