"""
backend/workhive/job/repository.py

Job Entity Store
Reads and writes job rows for the lifecycle engine:
- Fresh single-row reads (identity map bypassed)
- Conditional status writes keyed on (status, version)
- Listing queries for the public board, worker board and "my jobs"
- Deletion together with the job's applications
"""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, exists, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.application.models import Application
from workhive.database.base import utcnow
from workhive.database.enums import JobStatus
from workhive.invoice.models import Invoice
from workhive.job.models import Job


async def get_job(db: AsyncSession, job_id: UUID) -> Job | None:
    """Load a job as currently committed, overwriting any stale in-session copy."""
    return await db.get(Job, job_id, populate_existing=True)


async def compare_and_set_job(
    db: AsyncSession,
    job: Job,
    expected_status: JobStatus,
    **values: Any,
) -> bool:
    """
    Write `values` only if the row still has `expected_status` and the
    version seen in `job`. Returns False when a concurrent writer won.
    """
    stmt = (
        update(Job)
        .where(
            Job.id == job.id,
            Job.status == expected_status,
            Job.version == job.version,
        )
        .values(**values, version=job.version + 1, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount == 1


async def insert_job(db: AsyncSession, job: Job) -> Job:
    db.add(job)
    await db.flush()
    return job


async def list_open_jobs(
    db: AsyncSession, category: str | None = None, location: str | None = None
) -> list[Job]:
    stmt = select(Job).where(Job.status == JobStatus.OPEN)
    if category:
        stmt = stmt.where(Job.category == category)
    if location:
        stmt = stmt.where(Job.location == location)
    stmt = stmt.order_by(Job.created_at.desc()).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_available_jobs(db: AsyncSession, worker_id: UUID) -> list[Job]:
    """Open jobs the worker did not post and has not applied to."""
    applied = exists().where(Application.job_id == Job.id, Application.worker_id == worker_id)
    stmt = (
        select(Job)
        .where(Job.status == JobStatus.OPEN, Job.client_id != worker_id, ~applied)
        .order_by(Job.created_at.desc())
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_jobs_for_user(
    db: AsyncSession, user_id: UUID, skip: int, limit: int
) -> tuple[list[Job], int]:
    condition = or_(Job.client_id == user_id, Job.worker_id == user_id)
    total = await db.scalar(select(func.count()).select_from(Job).where(condition))
    stmt = (
        select(Job)
        .where(condition)
        .order_by(Job.created_at.desc())
        .offset(skip)
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all()), total or 0


async def has_invoices(db: AsyncSession, job_id: UUID) -> bool:
    return bool(await db.scalar(select(exists().where(Invoice.job_id == job_id))))


async def delete_job(db: AsyncSession, job: Job) -> None:
    """Remove the job and every application for it."""
    await db.execute(
        delete(Application)
        .where(Application.job_id == job.id)
        .execution_options(synchronize_session=False)
    )
    await db.delete(job)
    await db.flush()
