"""
admin/routes.py

Admin API Routes

Defines routes for administrative operations including:
- Listing users, jobs and applications with search and pagination
- Deleting users, jobs and applications

All endpoints require Admin authentication.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from workhive.admin.schemas import AdminApplicationView, AdminJobView, AdminUserView
from workhive.admin.services import AdminService
from workhive.core.dependencies import AdminDep, DBDep, PaginationParams
from workhive.core.schemas import MessageResponse, PaginatedResponse

# ---------------------------------------------------
# Router Configuration
# ---------------------------------------------------
router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)

PaginationDep = Annotated[PaginationParams, Depends()]
SearchQuery = Annotated[str | None, Query(max_length=100, description="Case-insensitive search")]


# ---------------------------------------------------
# Listings
# ---------------------------------------------------
@router.get(
    "/users",
    response_model=PaginatedResponse[AdminUserView],
    status_code=status.HTTP_200_OK,
    summary="List Users",
    description="Search users by name or email. Requires Admin role.",
)
async def list_users(
    db: DBDep, admin: AdminDep, pagination: PaginationDep, search: SearchQuery = None
) -> PaginatedResponse[AdminUserView]:
    users, total_count = await AdminService(db).list_users(
        search=search, skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse.build(users, total_count, pagination.skip, pagination.limit)


@router.get(
    "/jobs",
    response_model=PaginatedResponse[AdminJobView],
    status_code=status.HTTP_200_OK,
    summary="List Jobs",
    description="Search jobs by title or description. Requires Admin role.",
)
async def list_jobs(
    db: DBDep, admin: AdminDep, pagination: PaginationDep, search: SearchQuery = None
) -> PaginatedResponse[AdminJobView]:
    jobs, total_count = await AdminService(db).list_jobs(
        search=search, skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse.build(jobs, total_count, pagination.skip, pagination.limit)


@router.get(
    "/applications",
    response_model=PaginatedResponse[AdminApplicationView],
    status_code=status.HTTP_200_OK,
    summary="List Applications",
    description="Search applications by job title or worker name. Requires Admin role.",
)
async def list_applications(
    db: DBDep, admin: AdminDep, pagination: PaginationDep, search: SearchQuery = None
) -> PaginatedResponse[AdminApplicationView]:
    applications, total_count = await AdminService(db).list_applications(
        search=search, skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse.build(applications, total_count, pagination.skip, pagination.limit)


# ---------------------------------------------------
# Deletion
# ---------------------------------------------------
@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete User",
)
async def delete_user(user_id: UUID, db: DBDep, admin: AdminDep) -> MessageResponse:
    await AdminService(db).delete_user(admin, user_id)
    return MessageResponse(detail="User deleted successfully")


@router.delete(
    "/jobs/{job_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Job",
)
async def delete_job(job_id: UUID, db: DBDep, admin: AdminDep) -> MessageResponse:
    await AdminService(db).delete_job(admin, job_id)
    return MessageResponse(detail="Job deleted successfully")


@router.delete(
    "/applications/{application_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Application",
)
async def delete_application(application_id: UUID, db: DBDep, admin: AdminDep) -> MessageResponse:
    await AdminService(db).delete_application(admin, application_id)
    return MessageResponse(detail="Application deleted successfully")
