# tests/users/test_user_services.py
"""
User profile service against a real SQLite database.
"""

from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from workhive.database.enums import UserRole
from workhive.users import schemas as user_schemas
from workhive.users.services import UserService


@pytest.mark.asyncio
async def test_update_own_profile(db_session: AsyncSession, make_actor) -> None:
    worker = await make_actor(UserRole.WORKER)

    updated = await UserService(db_session).update_user(
        worker,
        worker.id,
        user_schemas.UserUpdate(bio="Carpenter", phone="+234 801-234-5678", skills=["wood", "wood"]),
    )

    assert updated.bio == "Carpenter"
    assert updated.phone == "2348012345678"
    assert updated.skills == ["wood"]
    assert updated.role == UserRole.WORKER


@pytest.mark.asyncio
async def test_update_other_profile_requires_admin(db_session: AsyncSession, make_actor) -> None:
    client = await make_actor(UserRole.CLIENT)
    worker = await make_actor(UserRole.WORKER)
    admin = await make_actor(UserRole.ADMIN)
    service = UserService(db_session)

    with pytest.raises(ForbiddenError):
        await service.update_user(client, worker.id, user_schemas.UserUpdate(name="Hijacked"))

    renamed = await service.update_user(admin, worker.id, user_schemas.UserUpdate(name="Renamed"))
    assert renamed.name == "Renamed"


@pytest.mark.asyncio
async def test_update_rejects_empty_patch(db_session: AsyncSession, make_actor) -> None:
    client = await make_actor(UserRole.CLIENT)

    with pytest.raises(ValidationError):
        await UserService(db_session).update_user(client, client.id, user_schemas.UserUpdate())


def test_update_schema_rejects_null_name_and_skills() -> None:
    for field in ("name", "skills"):
        with pytest.raises(PydanticValidationError):
            user_schemas.UserUpdate.model_validate({field: None})

    # Optional contact fields can still be cleared
    cleared = user_schemas.UserUpdate.model_validate({"bio": None, "phone": None})
    assert cleared.model_dump(exclude_unset=True) == {"bio": None, "phone": None}


@pytest.mark.asyncio
async def test_rejected_null_skills_leave_profile_readable(
    db_session: AsyncSession, make_actor
) -> None:
    worker = await make_actor(UserRole.WORKER)
    service = UserService(db_session)
    await service.update_user(worker, worker.id, user_schemas.UserUpdate(skills=["plumbing"]))

    with pytest.raises(PydanticValidationError):
        await service.update_user(
            worker, worker.id, user_schemas.UserUpdate.model_validate({"skills": None})
        )

    user = await service.get_user(worker.id)
    profile = user_schemas.UserRead.model_validate(user)
    assert profile.skills == ["plumbing"]


def test_update_schema_rejects_role_and_bad_phone() -> None:
    with pytest.raises(PydanticValidationError):
        user_schemas.UserUpdate.model_validate({"role": "admin"})
    with pytest.raises(PydanticValidationError):
        user_schemas.UserUpdate(phone="12345")


@pytest.mark.asyncio
async def test_get_missing_user(db_session: AsyncSession) -> None:
    with pytest.raises(NotFoundError):
        await UserService(db_session).get_user(uuid4())


@pytest.mark.asyncio
async def test_delete_unreferenced_user(db_session: AsyncSession, make_actor) -> None:
    worker = await make_actor(UserRole.WORKER)
    service = UserService(db_session)

    await service.delete_user(worker, worker.id)

    with pytest.raises(NotFoundError):
        await service.get_user(worker.id)


@pytest.mark.asyncio
async def test_delete_referenced_user_conflicts(
    db_session: AsyncSession, make_actor, make_job
) -> None:
    client = await make_actor(UserRole.CLIENT)
    admin = await make_actor(UserRole.ADMIN)
    stranger = await make_actor(UserRole.CLIENT)
    await make_job(client)
    service = UserService(db_session)

    with pytest.raises(ForbiddenError):
        await service.delete_user(stranger, client.id)
    with pytest.raises(ConflictError):
        await service.delete_user(admin, client.id)

    assert (await service.get_user(client.id)).id == client.id
