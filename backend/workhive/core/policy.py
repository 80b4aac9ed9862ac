"""
core/policy.py

Authorization Engine

Pure ownership and role rules evaluated by the services against entities
loaded inside the same transaction that mutates them. Each `ensure_*`
helper raises ForbiddenError and logs the denial; `can_*` helpers only
answer the question.

Admins bypass ownership for reads and deletes of jobs, applications, users
and invoices, never for business transitions (accept, reject, claim).
"""

import logging
from uuid import UUID

from workhive.application.models import Application
from workhive.auth.schemas import Actor
from workhive.core.exceptions import ForbiddenError
from workhive.database.enums import UserRole
from workhive.invoice.models import Invoice
from workhive.job.models import Job

logger = logging.getLogger(__name__)


def _deny(actor: Actor, action: str, target: str, message: str) -> ForbiddenError:
    logger.warning(f"[RBAC] Denied {action} on {target} for user {actor.id} ({actor.role.value})")
    return ForbiddenError(message)


# ---------------------------------------------------
# Jobs
# ---------------------------------------------------
def owns_job(actor: Actor, job: Job) -> bool:
    return job.client_id == actor.id


def can_cancel_job(actor: Actor, job: Job) -> bool:
    return owns_job(actor, job) or actor.is_admin


def can_delete_job(actor: Actor, job: Job) -> bool:
    return owns_job(actor, job) or actor.is_admin


def ensure_can_create_job(actor: Actor) -> None:
    if actor.role != UserRole.CLIENT:
        raise _deny(actor, "create", "job", "Only clients can create jobs.")


def ensure_owns_job(actor: Actor, job: Job, action: str) -> None:
    if not owns_job(actor, job):
        raise _deny(actor, action, f"job {job.id}", f"Not authorized to {action} this job.")


def ensure_can_cancel_job(actor: Actor, job: Job) -> None:
    if not can_cancel_job(actor, job):
        raise _deny(actor, "cancel", f"job {job.id}", "Not authorized to cancel this job.")


def ensure_can_delete_job(actor: Actor, job: Job) -> None:
    if not can_delete_job(actor, job):
        raise _deny(actor, "delete", f"job {job.id}", "Not authorized to delete this job.")


def ensure_is_worker(actor: Actor, action: str) -> None:
    if actor.role != UserRole.WORKER:
        raise _deny(actor, action, "job", f"Only workers can {action} jobs.")


def ensure_can_work_job(actor: Actor, job: Job, action: str) -> None:
    """Claiming and applying: workers only, never on a job they posted."""
    ensure_is_worker(actor, action)
    if owns_job(actor, job):
        raise _deny(actor, action, f"job {job.id}", f"You cannot {action} your own job.")


def ensure_can_confirm_completion(actor: Actor, job: Job, mutual: bool) -> None:
    if owns_job(actor, job):
        return
    if mutual and job.worker_id is not None and job.worker_id == actor.id:
        return
    raise _deny(actor, "complete", f"job {job.id}", "Not authorized to complete this job.")


# ---------------------------------------------------
# Applications
# ---------------------------------------------------
def is_applicant(actor: Actor, application: Application) -> bool:
    return application.worker_id == actor.id


def can_read_application(actor: Actor, application: Application, job: Job) -> bool:
    return is_applicant(actor, application) or owns_job(actor, job) or actor.is_admin


def can_delete_application(actor: Actor, application: Application, job: Job) -> bool:
    return can_read_application(actor, application, job)


def ensure_can_list_job_applications(actor: Actor, job: Job) -> None:
    if not (owns_job(actor, job) or actor.is_admin):
        raise _deny(
            actor,
            "list applications",
            f"job {job.id}",
            "Not authorized to view applications for this job.",
        )


def ensure_can_read_application(actor: Actor, application: Application, job: Job) -> None:
    if not can_read_application(actor, application, job):
        raise _deny(
            actor, "read", f"application {application.id}", "Not authorized to view this application."
        )


def ensure_can_decide_application(actor: Actor, application: Application, job: Job) -> None:
    if not owns_job(actor, job):
        raise _deny(
            actor,
            "decide",
            f"application {application.id}",
            "Not authorized to update this application.",
        )


def ensure_can_delete_application(actor: Actor, application: Application, job: Job) -> None:
    if not can_delete_application(actor, application, job):
        raise _deny(
            actor,
            "delete",
            f"application {application.id}",
            "Not authorized to delete this application.",
        )


# ---------------------------------------------------
# Users
# ---------------------------------------------------
def ensure_self_or_admin(actor: Actor, user_id: UUID, action: str) -> None:
    if actor.id != user_id and not actor.is_admin:
        raise _deny(actor, action, f"user {user_id}", f"Not authorized to {action} this user.")


# ---------------------------------------------------
# Invoices
# ---------------------------------------------------
def is_invoice_party(actor: Actor, invoice: Invoice) -> bool:
    return actor.id in (invoice.client_id, invoice.worker_id)


def ensure_can_bill_job(actor: Actor, job: Job) -> None:
    if job.worker_id is None or job.worker_id != actor.id:
        raise _deny(
            actor,
            "invoice",
            f"job {job.id}",
            "Only the worker assigned to this job can invoice it.",
        )


def ensure_can_read_invoice(actor: Actor, invoice: Invoice) -> None:
    if not (is_invoice_party(actor, invoice) or actor.is_admin):
        raise _deny(actor, "read", f"invoice {invoice.id}", "Not authorized to view this invoice.")


def ensure_can_update_invoice(actor: Actor, invoice: Invoice) -> None:
    if not (invoice.client_id == actor.id or actor.is_admin):
        raise _deny(
            actor, "update", f"invoice {invoice.id}", "Not authorized to update this invoice."
        )
