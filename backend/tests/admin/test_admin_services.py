"""
tests/admin/test_admin_services.py

AdminService against SQLite:
- Case-insensitive search and pagination totals
- Deletion delegates to the owner-side guards
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.admin.services import AdminService
from workhive.application.models import Application
from workhive.core.exceptions import ConflictError, NotFoundError
from workhive.database.enums import ApplicationStatus, UserRole
from workhive.job.services import JobService


@pytest.mark.asyncio
async def test_list_users_search_and_pagination(db_session: AsyncSession, make_actor) -> None:
    await make_actor(UserRole.CLIENT, name="Grace Hopper")
    await make_actor(UserRole.WORKER, name="Alan Turing")
    await make_actor(UserRole.WORKER, name="Ada Lovelace")
    service = AdminService(db_session)

    page, total = await service.list_users(skip=0, limit=2)
    assert total == 3
    assert len(page) == 2

    matches, match_total = await service.list_users(search="  TURING ")
    assert match_total == 1
    assert matches[0].name == "Alan Turing"

    by_email, _ = await service.list_users(search="client.")
    assert [u.role for u in by_email] == [UserRole.CLIENT]


@pytest.mark.asyncio
async def test_list_jobs_search(db_session: AsyncSession, make_actor, make_job) -> None:
    client = await make_actor(UserRole.CLIENT)
    await make_job(client, title="Paint the fence")
    await make_job(client, title="Fix roof", description="Replace broken tiles")
    service = AdminService(db_session)

    jobs, total = await service.list_jobs(search="TILES")
    assert total == 1
    assert jobs[0].title == "Fix roof"

    _, all_total = await service.list_jobs()
    assert all_total == 2


@pytest.mark.asyncio
async def test_list_applications_joins_title_and_worker(
    db_session: AsyncSession, make_actor, make_job
) -> None:
    client = await make_actor(UserRole.CLIENT)
    worker = await make_actor(UserRole.WORKER, name="Linus Torvalds")
    job = await make_job(client, title="Build shed")
    db_session.add(
        Application(
            job_id=job.id,
            worker_id=worker.id,
            cover_letter="I build sheds.",
            status=ApplicationStatus.PENDING,
        )
    )
    await db_session.commit()
    service = AdminService(db_session)

    by_worker, total = await service.list_applications(search="linus")
    assert total == 1
    assert by_worker[0].job_title == "Build shed"
    assert by_worker[0].worker_name == "Linus Torvalds"

    by_title, _ = await service.list_applications(search="shed")
    assert len(by_title) == 1
    none, none_total = await service.list_applications(search="plumbing")
    assert none == [] and none_total == 0


@pytest.mark.asyncio
async def test_admin_delete_job_and_user(db_session: AsyncSession, make_actor, make_job) -> None:
    admin = await make_actor(UserRole.ADMIN)
    client = await make_actor(UserRole.CLIENT)
    job = await make_job(client)
    service = AdminService(db_session)

    # Client still owns a job
    with pytest.raises(ConflictError):
        await service.delete_user(admin, client.id)

    await service.delete_job(admin, job.id)
    with pytest.raises(NotFoundError):
        await JobService(db_session).get_job(job.id)

    await service.delete_user(admin, client.id)
    _, total = await service.list_users()
    assert total == 1
