"""
backend/workhive/job/services.py

Job Service Layer
Owns the job lifecycle state machine:
- open -> in_progress (direct claim; acceptance goes through ApplicationService)
- in_progress -> completed (client policy or mutual confirmation)
- open | in_progress -> cancelled
Plus job creation, content updates, listings and deletion.

Every status write is a compare-and-set on (status, version). When the
write loses to a concurrent writer the job is re-read and the guards are
evaluated again; only if they still pass is the write retried.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from workhive.application import repository as application_repo
from workhive.auth.schemas import Actor
from workhive.core import policy
from workhive.core.config import settings
from workhive.core.exceptions import ConflictError, NotFoundError, ValidationError
from workhive.database.enums import JobStatus
from workhive.database.session import atomic
from workhive.job import repository as job_repo
from workhive.job import schemas
from workhive.job.models import Job

logger = logging.getLogger(__name__)

# A guard raises ForbiddenError/ConflictError; a writer returns the column
# values to set, or an empty dict when there is nothing to write.
Guard = Callable[[Job], None]
Writer = Callable[[Job], dict[str, Any]]


# ---------------------------------------------------
# State Guards
# ---------------------------------------------------
def require_status(job: Job, *allowed: JobStatus, action: str) -> None:
    if job.status not in allowed:
        logger.info(f"[JOB] Rejected {action} on job {job.id}: status is {job.status.value}")
        raise ConflictError(f"Cannot {action} a job with status '{job.status.value}'.")


class JobService:
    """Service class for job-related business logic."""

    def __init__(
        self,
        db: AsyncSession,
        completion_policy: str | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self.db = db
        self.completion_policy = completion_policy or settings.JOB_COMPLETION_POLICY
        self.max_attempts = max_attempts or settings.TRANSITION_MAX_ATTEMPTS

    async def _get_job_or_404(self, job_id: UUID) -> Job:
        """Helper to retrieve a job or raise 404 if not found."""
        job = await job_repo.get_job(self.db, job_id)
        if not job:
            logger.warning(f"[JOB] Job not found: job_id={job_id}")
            raise NotFoundError("Job not found.")
        return job

    # ---------------------------------------------------
    # Conditional Transition Engine
    # ---------------------------------------------------
    async def transition(self, job_id: UUID, action: str, guard: Guard, writer: Writer) -> Job:
        """
        Apply one guarded write to a job inside the caller's transaction.

        The job is read fresh, `guard` is evaluated, and the values from
        `writer` are written conditionally on the status and version that
        were read. A lost race re-reads and re-checks; guard failures are
        raised immediately and never retried.
        """
        for attempt in range(1, self.max_attempts + 1):
            job = await self._get_job_or_404(job_id)
            guard(job)
            values = writer(job)
            if not values:
                return job
            if await job_repo.compare_and_set_job(self.db, job, job.status, **values):
                return await self._get_job_or_404(job_id)
            logger.warning(
                f"[JOB] Concurrent update on job {job_id} during {action} "
                f"(attempt {attempt}/{self.max_attempts})"
            )

        logger.warning(f"[JOB] Giving up {action} on job {job_id} after {self.max_attempts} attempts")
        raise ConflictError("The job was modified concurrently. Please retry.")

    # ---------------------------------------------------
    # Create / Read
    # ---------------------------------------------------
    async def create_job(self, actor: Actor, payload: schemas.JobCreate) -> Job:
        """Client posts a new open job."""
        policy.ensure_can_create_job(actor)

        async with atomic(self.db):
            job = await job_repo.insert_job(
                self.db, Job(client_id=actor.id, status=JobStatus.OPEN, **payload.model_dump())
            )

        logger.info(f"[JOB] Job created: job_id={job.id} by client={actor.id}")
        return job

    async def get_job(self, job_id: UUID) -> Job:
        return await self._get_job_or_404(job_id)

    async def list_open_jobs(self, filters: schemas.JobFilters) -> list[Job]:
        """
        Open jobs, newest first. Category and location match exactly; a skills
        filter keeps jobs sharing at least one required skill (case-insensitive).
        """
        jobs = await job_repo.list_open_jobs(
            self.db, category=filters.category, location=filters.location
        )
        wanted = {skill.strip().lower() for skill in filters.skills if skill.strip()}
        if wanted:
            jobs = [job for job in jobs if wanted & {s.lower() for s in job.skills or []}]
        return jobs

    async def list_available_jobs(self, actor: Actor) -> list[Job]:
        """Worker job board: open jobs not posted by the worker and not yet applied to."""
        return await job_repo.list_available_jobs(self.db, actor.id)

    async def list_jobs_for_user(self, actor: Actor, skip: int, limit: int) -> tuple[list[Job], int]:
        """Jobs the actor posted or is assigned to."""
        return await job_repo.list_jobs_for_user(self.db, actor.id, skip, limit)

    # ---------------------------------------------------
    # Content Update
    # ---------------------------------------------------
    async def update_job(self, actor: Actor, job_id: UUID, patch: schemas.JobUpdate) -> Job:
        changes = patch.changes()
        if not changes:
            raise ValidationError("No fields provided for update.")

        async with atomic(self.db):
            job = await self.transition(
                job_id,
                "update",
                guard=lambda j: policy.ensure_owns_job(actor, j, "update"),
                writer=lambda j: changes,
            )

        logger.info(f"[JOB] Job {job_id} updated by client={actor.id}: fields={sorted(changes)}")
        return job

    # ---------------------------------------------------
    # Lifecycle Transitions
    # ---------------------------------------------------
    async def claim_job(self, actor: Actor, job_id: UUID) -> Job:
        """
        Worker takes an open job directly.

        The claimer's own pending application, if any, is accepted and every
        other pending application is rejected in the same transaction.
        """

        def guard(job: Job) -> None:
            policy.ensure_can_work_job(actor, job, "claim")
            require_status(job, JobStatus.OPEN, action="claim")

        async with atomic(self.db):
            job = await self.transition(
                job_id,
                "claim",
                guard=guard,
                writer=lambda j: {
                    "status": JobStatus.IN_PROGRESS,
                    "worker_id": actor.id,
                    "started_at": datetime.now(timezone.utc),
                },
            )
            accepted = await application_repo.accept_pending_for_worker(self.db, job_id, actor.id)
            rejected = await application_repo.reject_pending_siblings(self.db, job_id, actor.id)

        logger.info(
            f"[JOB] Job {job_id} claimed by worker={actor.id} -> {job.status.value} "
            f"(applications accepted={accepted}, rejected={rejected})"
        )
        return job

    async def complete_job(self, actor: Actor, job_id: UUID) -> Job:
        """
        Complete an in-progress job.

        Under the `client` policy the owning client completes the job. Under
        the `mutual` policy the client and the assigned worker each confirm,
        and the job completes once both confirmations are recorded.
        """
        mutual = self.completion_policy == "mutual"

        def guard(job: Job) -> None:
            if mutual:
                policy.ensure_can_confirm_completion(actor, job, mutual=True)
            else:
                policy.ensure_owns_job(actor, job, "complete")
            require_status(job, JobStatus.IN_PROGRESS, action="complete")

        def writer(job: Job) -> dict[str, Any]:
            if not mutual:
                return {
                    "status": JobStatus.COMPLETED,
                    "client_confirmed_completion": True,
                    "completed_at": datetime.now(timezone.utc),
                }

            if policy.owns_job(actor, job):
                own_flag, own_done = "client_confirmed_completion", job.client_confirmed_completion
                other_done = job.worker_confirmed_completion
            else:
                own_flag, own_done = "worker_confirmed_completion", job.worker_confirmed_completion
                other_done = job.client_confirmed_completion

            if own_done:
                return {}
            values: dict[str, Any] = {own_flag: True}
            if other_done:
                values.update(status=JobStatus.COMPLETED, completed_at=datetime.now(timezone.utc))
            return values

        async with atomic(self.db):
            job = await self.transition(job_id, "complete", guard=guard, writer=writer)

        logger.info(
            f"[JOB] Completion confirmed on job {job_id} by user={actor.id} "
            f"(policy={self.completion_policy}) -> {job.status.value}"
        )
        return job

    async def cancel_job(self, actor: Actor, job_id: UUID, reason: str | None = None) -> Job:
        """Owning client or admin cancels an open or in-progress job."""

        def guard(job: Job) -> None:
            policy.ensure_can_cancel_job(actor, job)
            require_status(job, JobStatus.OPEN, JobStatus.IN_PROGRESS, action="cancel")

        async with atomic(self.db):
            job = await self.transition(
                job_id,
                "cancel",
                guard=guard,
                writer=lambda j: {
                    "status": JobStatus.CANCELLED,
                    "cancel_reason": reason,
                    "cancelled_at": datetime.now(timezone.utc),
                },
            )

        logger.info(f"[JOB] Job {job_id} cancelled by user={actor.id} -> {job.status.value}")
        return job

    # ---------------------------------------------------
    # Delete
    # ---------------------------------------------------
    async def delete_job(self, actor: Actor, job_id: UUID) -> None:
        """Owner or admin removes a job and its applications. Invoiced jobs are kept."""
        async with atomic(self.db):
            job = await self._get_job_or_404(job_id)
            policy.ensure_can_delete_job(actor, job)
            if await job_repo.has_invoices(self.db, job_id):
                raise ConflictError("Cannot delete a job that has invoices.")
            await job_repo.delete_job(self.db, job)

        logger.info(f"[JOB] Job {job_id} deleted by user={actor.id}")
