"""
[users] services.py

Business logic for user profiles: read, partial update and deletion by
the user themself or an admin. Users still referenced by jobs,
applications or invoices cannot be deleted.
"""

import logging
from uuid import UUID

from sqlalchemy import exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.application.models import Application
from workhive.auth.schemas import Actor
from workhive.core import policy
from workhive.core.exceptions import ConflictError, NotFoundError, ValidationError
from workhive.database.models import User
from workhive.database.session import atomic
from workhive.invoice.models import Invoice
from workhive.job.models import Job
from workhive.users import schemas

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_user_or_404(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id, populate_existing=True)
        if not user:
            logger.warning(f"[USER] User not found: user_id={user_id}")
            raise NotFoundError("User not found.")
        return user

    async def get_user(self, user_id: UUID) -> User:
        return await self._get_user_or_404(user_id)

    async def update_user(self, actor: Actor, user_id: UUID, patch: schemas.UserUpdate) -> User:
        policy.ensure_self_or_admin(actor, user_id, "update")
        changes = patch.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields provided for update.")

        async with atomic(self.db):
            user = await self._get_user_or_404(user_id)
            for field, value in changes.items():
                setattr(user, field, value)
            await self.db.flush()

        logger.info(f"[USER] User {user_id} updated by {actor.id}: fields={sorted(changes)}")
        return user

    async def _is_referenced(self, user_id: UUID) -> bool:
        stmt = select(
            or_(
                exists().where(or_(Job.client_id == user_id, Job.worker_id == user_id)),
                exists().where(Application.worker_id == user_id),
                exists().where(or_(Invoice.client_id == user_id, Invoice.worker_id == user_id)),
            )
        )
        return bool(await self.db.scalar(stmt))

    async def delete_user(self, actor: Actor, user_id: UUID) -> None:
        policy.ensure_self_or_admin(actor, user_id, "delete")

        async with atomic(self.db):
            user = await self._get_user_or_404(user_id)
            if await self._is_referenced(user_id):
                raise ConflictError(
                    "User still has jobs, applications or invoices and cannot be deleted."
                )
            await self.db.delete(user)
            await self.db.flush()

        logger.info(f"[USER] User {user_id} deleted by {actor.id}")
