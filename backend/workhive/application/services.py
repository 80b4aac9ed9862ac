"""
backend/workhive/application/services.py

Application Service Layer
Owns the application workflow:
- pending -> accepted (cascades: job open -> in_progress, siblings rejected)
- pending -> rejected
- creation guarded against duplicates and non-open jobs
- reads and deletion for the parties involved

All guards are evaluated against rows read inside the transaction that
performs the write, so a failed guard leaves nothing behind.
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.application import repository as application_repo
from workhive.application import schemas
from workhive.application.models import Application
from workhive.auth.schemas import Actor
from workhive.core import policy
from workhive.core.exceptions import ConflictError, NotFoundError
from workhive.database.enums import ApplicationStatus, JobStatus
from workhive.database.session import atomic
from workhive.job.models import Job
from workhive.job.services import JobService, require_status

logger = logging.getLogger(__name__)


class ApplicationService:
    """Service class for application-related business logic."""

    def __init__(self, db: AsyncSession, jobs: JobService | None = None) -> None:
        self.db = db
        self.jobs = jobs or JobService(db)

    async def _get_application_or_404(self, application_id: UUID) -> Application:
        application = await application_repo.get_application(self.db, application_id)
        if not application:
            logger.warning(f"[APPLICATION] Application not found: application_id={application_id}")
            raise NotFoundError("Application not found.")
        return application

    async def _get_with_job(self, application_id: UUID) -> tuple[Application, Job]:
        application = await self._get_application_or_404(application_id)
        job = await self.jobs.get_job(application.job_id)
        return application, job

    # ---------------------------------------------------
    # Create
    # ---------------------------------------------------
    async def create_application(self, actor: Actor, payload: schemas.ApplicationCreate) -> Application:
        """
        Worker applies to an open job.

        The job row is rewritten with its current status so its version moves;
        an acceptance or claim racing with this insert fails its own
        conditional write instead of missing the new application.
        """
        policy.ensure_is_worker(actor, "apply to")

        def guard(job: Job) -> None:
            policy.ensure_can_work_job(actor, job, "apply to")
            require_status(job, JobStatus.OPEN, action="apply to")

        async with atomic(self.db):
            await self.jobs.transition(
                payload.job_id,
                "apply",
                guard=guard,
                writer=lambda j: {"status": JobStatus.OPEN},
            )

            if await application_repo.find_application(self.db, payload.job_id, actor.id):
                logger.info(f"[APPLICATION] Duplicate application: job={payload.job_id} worker={actor.id}")
                raise ConflictError("You have already applied to this job.")

            try:
                application = await application_repo.insert_application(
                    self.db,
                    Application(
                        job_id=payload.job_id,
                        worker_id=actor.id,
                        cover_letter=payload.cover_letter,
                        status=ApplicationStatus.PENDING,
                    ),
                )
            except IntegrityError as e:
                logger.info(f"[APPLICATION] Concurrent duplicate rejected by constraint: {e.orig}")
                raise ConflictError("You have already applied to this job.")

        logger.info(
            f"[APPLICATION] Application {application.id} created: job={payload.job_id} "
            f"worker={actor.id} -> pending"
        )
        return application

    # ---------------------------------------------------
    # Decide
    # ---------------------------------------------------
    async def decide_application(
        self, actor: Actor, application_id: UUID, decision: ApplicationStatus
    ) -> Application:
        """
        Owning client accepts or rejects a pending application.

        Accepting moves the job to in_progress with the applicant as worker
        and rejects every other pending application of the job, all in one
        transaction.
        """
        async with atomic(self.db):
            application, job = await self._get_with_job(application_id)
            policy.ensure_can_decide_application(actor, application, job)
            if application.status != ApplicationStatus.PENDING:
                raise ConflictError(
                    f"Application has already been {application.status.value}."
                )

            rejected = 0
            if decision == ApplicationStatus.ACCEPTED:

                def guard(current: Job) -> None:
                    policy.ensure_can_decide_application(actor, application, current)
                    require_status(current, JobStatus.OPEN, action="accept an application for")

                await self.jobs.transition(
                    job.id,
                    "accept",
                    guard=guard,
                    writer=lambda j: {
                        "status": JobStatus.IN_PROGRESS,
                        "worker_id": application.worker_id,
                        "started_at": datetime.now(timezone.utc),
                    },
                )

            if not await application_repo.set_status_if_pending(self.db, application_id, decision):
                raise ConflictError("Application is no longer pending.")

            if decision == ApplicationStatus.ACCEPTED:
                rejected = await application_repo.reject_pending_siblings(
                    self.db, job.id, application.worker_id
                )

            application = await self._get_application_or_404(application_id)

        logger.info(
            f"[APPLICATION] Application {application_id} on job {job.id} decided by client={actor.id} "
            f"-> {application.status.value} (siblings rejected={rejected})"
        )
        return application

    # ---------------------------------------------------
    # Delete / Read
    # ---------------------------------------------------
    async def delete_application(self, actor: Actor, application_id: UUID) -> None:
        """Applicant, owning client or admin removes an application; the job is untouched."""
        async with atomic(self.db):
            application, job = await self._get_with_job(application_id)
            policy.ensure_can_delete_application(actor, application, job)
            await application_repo.delete_application(self.db, application)

        logger.info(f"[APPLICATION] Application {application_id} deleted by user={actor.id}")

    async def get_application(self, actor: Actor, application_id: UUID) -> Application:
        application, job = await self._get_with_job(application_id)
        policy.ensure_can_read_application(actor, application, job)
        return application

    async def list_applications_for_job(self, actor: Actor, job_id: UUID) -> list[Application]:
        job = await self.jobs.get_job(job_id)
        policy.ensure_can_list_job_applications(actor, job)
        return await application_repo.list_for_job(self.db, job_id)

    async def list_applications_for_worker(self, actor: Actor) -> list[Application]:
        return await application_repo.list_for_worker(self.db, actor.id)
