"""
backend/workhive/application/repository.py

Application Entity Store
Application rows and the conditional status writes used by the acceptance
and claim cascades. Every status write only matches rows that are still
pending.
"""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.application.models import Application
from workhive.database.base import utcnow
from workhive.database.enums import ApplicationStatus


async def get_application(db: AsyncSession, application_id: UUID) -> Application | None:
    return await db.get(Application, application_id, populate_existing=True)


async def find_application(db: AsyncSession, job_id: UUID, worker_id: UUID) -> Application | None:
    stmt = select(Application).where(
        Application.job_id == job_id, Application.worker_id == worker_id
    ).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def insert_application(db: AsyncSession, application: Application) -> Application:
    db.add(application)
    await db.flush()
    return application


async def set_status_if_pending(
    db: AsyncSession, application_id: UUID, status: ApplicationStatus
) -> bool:
    """Move one pending application to `status`. False if it is no longer pending."""
    stmt = (
        update(Application)
        .where(Application.id == application_id, Application.status == ApplicationStatus.PENDING)
        .values(status=status, version=Application.version + 1, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount == 1


async def accept_pending_for_worker(db: AsyncSession, job_id: UUID, worker_id: UUID) -> int:
    stmt = (
        update(Application)
        .where(
            Application.job_id == job_id,
            Application.worker_id == worker_id,
            Application.status == ApplicationStatus.PENDING,
        )
        .values(
            status=ApplicationStatus.ACCEPTED,
            version=Application.version + 1,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount


async def reject_pending_siblings(db: AsyncSession, job_id: UUID, keep_worker_id: UUID) -> int:
    """Reject every pending application of the job except the given worker's."""
    stmt = (
        update(Application)
        .where(
            Application.job_id == job_id,
            Application.worker_id != keep_worker_id,
            Application.status == ApplicationStatus.PENDING,
        )
        .values(
            status=ApplicationStatus.REJECTED,
            version=Application.version + 1,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount


async def list_for_job(db: AsyncSession, job_id: UUID) -> list[Application]:
    stmt = (
        select(Application)
        .where(Application.job_id == job_id)
        .order_by(Application.created_at.desc())
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_for_worker(db: AsyncSession, worker_id: UUID) -> list[Application]:
    stmt = (
        select(Application)
        .where(Application.worker_id == worker_id)
        .order_by(Application.created_at.desc())
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def delete_application(db: AsyncSession, application: Application) -> None:
    await db.delete(application)
    await db.flush()
