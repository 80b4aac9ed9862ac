"""
[users] routes.py

Profile endpoints:
- /users/me: own profile (read, update, delete)
- /users/{user_id}: any profile for authenticated users; writes by self or admin
"""

from uuid import UUID

from fastapi import APIRouter, status

from workhive.core.dependencies import ActorDep, DBDep
from workhive.core.schemas import MessageResponse
from workhive.users import schemas
from workhive.users.services import UserService

router = APIRouter(prefix="/users", tags=["Users"])


# ---------------------------------------------------
# Own Profile
# ---------------------------------------------------
@router.get(
    "/me",
    response_model=schemas.UserRead,
    status_code=status.HTTP_200_OK,
    summary="Get My Profile",
)
async def get_me(db: DBDep, actor: ActorDep) -> schemas.UserRead:
    user = await UserService(db).get_user(actor.id)
    return schemas.UserRead.model_validate(user)


@router.patch(
    "/me",
    response_model=schemas.UserRead,
    status_code=status.HTTP_200_OK,
    summary="Update My Profile",
)
async def update_me(payload: schemas.UserUpdate, db: DBDep, actor: ActorDep) -> schemas.UserRead:
    user = await UserService(db).update_user(actor, actor.id, payload)
    return schemas.UserRead.model_validate(user)


@router.delete(
    "/me",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete My Account",
)
async def delete_me(db: DBDep, actor: ActorDep) -> MessageResponse:
    await UserService(db).delete_user(actor, actor.id)
    return MessageResponse(detail="User deleted successfully")


# ---------------------------------------------------
# Profile by ID
# ---------------------------------------------------
@router.get(
    "/{user_id}",
    response_model=schemas.UserRead,
    status_code=status.HTTP_200_OK,
    summary="Get User Profile",
)
async def get_user(user_id: UUID, db: DBDep, actor: ActorDep) -> schemas.UserRead:
    user = await UserService(db).get_user(user_id)
    return schemas.UserRead.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=schemas.UserRead,
    status_code=status.HTTP_200_OK,
    summary="Update User Profile",
    description="The user themself or an admin updates a profile.",
)
async def update_user(
    user_id: UUID, payload: schemas.UserUpdate, db: DBDep, actor: ActorDep
) -> schemas.UserRead:
    user = await UserService(db).update_user(actor, user_id, payload)
    return schemas.UserRead.model_validate(user)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete User",
    description="The user themself or an admin deletes an account.",
)
async def delete_user(user_id: UUID, db: DBDep, actor: ActorDep) -> MessageResponse:
    await UserService(db).delete_user(actor, user_id)
    return MessageResponse(detail="User deleted successfully")
