"""
admin/services.py

Admin service layer:
- Paginated, searchable listings of users, jobs and applications
- Deletion of users, jobs and applications with the same guards the
  owner-side deletes apply
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.admin import schemas
from workhive.application.models import Application
from workhive.application.services import ApplicationService
from workhive.auth.schemas import Actor
from workhive.database.models import User
from workhive.job.models import Job
from workhive.job.services import JobService
from workhive.users.services import UserService

logger = logging.getLogger(__name__)


def _pattern(search: str) -> str:
    return f"%{search.strip().lower()}%"


class AdminService:
    """Admin-only views across users, jobs and applications."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, stmt: Select[Any]) -> int:
        total = await self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        return total or 0

    # ---------------------------------------------------
    # Listings
    # ---------------------------------------------------
    async def list_users(
        self, search: str | None = None, skip: int = 0, limit: int = 20
    ) -> tuple[list[schemas.AdminUserView], int]:
        """Users matching `search` on name or email, newest first."""
        stmt = select(User)
        if search and search.strip():
            pattern = _pattern(search)
            stmt = stmt.where(
                or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern))
            )

        total = await self._count(stmt)
        rows = await self.db.execute(
            stmt.order_by(User.created_at.desc())
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        users = [schemas.AdminUserView.model_validate(u) for u in rows.scalars().all()]
        logger.info(f"[ADMIN] Listed users: search={search!r} total={total}")
        return users, total

    async def list_jobs(
        self, search: str | None = None, skip: int = 0, limit: int = 20
    ) -> tuple[list[schemas.AdminJobView], int]:
        """Jobs matching `search` on title or description, newest first."""
        stmt = select(Job)
        if search and search.strip():
            pattern = _pattern(search)
            stmt = stmt.where(
                or_(func.lower(Job.title).like(pattern), func.lower(Job.description).like(pattern))
            )

        total = await self._count(stmt)
        rows = await self.db.execute(
            stmt.order_by(Job.created_at.desc())
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        jobs = [schemas.AdminJobView.model_validate(j) for j in rows.scalars().all()]
        logger.info(f"[ADMIN] Listed jobs: search={search!r} total={total}")
        return jobs, total

    async def list_applications(
        self, search: str | None = None, skip: int = 0, limit: int = 20
    ) -> tuple[list[schemas.AdminApplicationView], int]:
        """Applications matching `search` on job title or worker name, newest first."""
        stmt = (
            select(Application, Job.title, User.name)
            .join(Job, Application.job_id == Job.id)
            .join(User, Application.worker_id == User.id)
        )
        if search and search.strip():
            pattern = _pattern(search)
            stmt = stmt.where(
                or_(func.lower(Job.title).like(pattern), func.lower(User.name).like(pattern))
            )

        total = await self._count(stmt)
        rows = await self.db.execute(
            stmt.order_by(Application.created_at.desc())
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        applications = [
            schemas.AdminApplicationView(
                id=application.id,
                job_id=application.job_id,
                worker_id=application.worker_id,
                status=application.status,
                job_title=job_title,
                worker_name=worker_name,
                created_at=application.created_at,
            )
            for application, job_title, worker_name in rows.all()
        ]
        logger.info(f"[ADMIN] Listed applications: search={search!r} total={total}")
        return applications, total

    # ---------------------------------------------------
    # Deletion
    # ---------------------------------------------------
    async def delete_user(self, admin: Actor, user_id: UUID) -> None:
        await UserService(self.db).delete_user(admin, user_id)
        logger.info(f"[ADMIN] Admin {admin.id} deleted user {user_id}")

    async def delete_job(self, admin: Actor, job_id: UUID) -> None:
        await JobService(self.db).delete_job(admin, job_id)
        logger.info(f"[ADMIN] Admin {admin.id} deleted job {job_id}")

    async def delete_application(self, admin: Actor, application_id: UUID) -> None:
        await ApplicationService(self.db).delete_application(admin, application_id)
        logger.info(f"[ADMIN] Admin {admin.id} deleted application {application_id}")
