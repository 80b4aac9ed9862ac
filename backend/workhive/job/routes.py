"""
backend/workhive/job/routes.py

Job Routes
Defines job-related API endpoints:
- List open jobs with filters (Public)
- Worker job board (Authenticated Worker)
- Jobs of the current user, paginated (Authenticated)
- Create a job (Authenticated Client)
- Read / update / delete a job
- Claim a job (Authenticated Worker)
- Complete and cancel a job
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from workhive.core.dependencies import (
    ActorDep,
    ClientDep,
    DBDep,
    PaginationParams,
    WorkerDep,
)
from workhive.core.schemas import MessageResponse, PaginatedResponse
from workhive.job import schemas
from workhive.job.services import JobService

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def job_filters(
    category: str | None = Query(None, description="Exact category"),
    location: str | None = Query(None, description="Exact location"),
    skills: str | None = Query(None, description="Comma-separated skills; any overlap matches"),
) -> schemas.JobFilters:
    skill_list = [s.strip() for s in skills.split(",") if s.strip()] if skills else []
    return schemas.JobFilters(category=category, location=location, skills=skill_list)


# ---------------------------------------------------
# Listings
# ---------------------------------------------------
@router.get(
    "",
    response_model=list[schemas.JobRead],
    status_code=status.HTTP_200_OK,
    summary="List Open Jobs",
    description="Public listing of open jobs, newest first, filtered by category, location and skills.",
)
async def list_open_jobs(
    db: DBDep,
    filters: Annotated[schemas.JobFilters, Depends(job_filters)],
) -> list[schemas.JobRead]:
    jobs = await JobService(db).list_open_jobs(filters)
    return [schemas.JobRead.model_validate(job) for job in jobs]


@router.get(
    "/available",
    response_model=list[schemas.JobRead],
    status_code=status.HTTP_200_OK,
    summary="Worker Job Board",
    description="Open jobs the worker has not applied to and did not post. Requires Worker role.",
)
async def list_available_jobs(db: DBDep, actor: WorkerDep) -> list[schemas.JobRead]:
    jobs = await JobService(db).list_available_jobs(actor)
    return [schemas.JobRead.model_validate(job) for job in jobs]


@router.get(
    "/mine",
    response_model=PaginatedResponse[schemas.JobRead],
    status_code=status.HTTP_200_OK,
    summary="List My Jobs",
    description="Jobs the current user posted or is assigned to.",
)
async def list_my_jobs(
    db: DBDep,
    actor: ActorDep,
    pagination: Annotated[PaginationParams, Depends()],
) -> PaginatedResponse[schemas.JobRead]:
    jobs, total_count = await JobService(db).list_jobs_for_user(
        actor, skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse.build(
        [schemas.JobRead.model_validate(job) for job in jobs],
        total_count,
        pagination.skip,
        pagination.limit,
    )


# ---------------------------------------------------
# Create / Read / Update / Delete
# ---------------------------------------------------
@router.post(
    "",
    response_model=schemas.JobRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Job",
    description="Client posts a new job. Requires Client role.",
)
async def create_job(payload: schemas.JobCreate, db: DBDep, actor: ClientDep) -> schemas.JobRead:
    job = await JobService(db).create_job(actor, payload)
    return schemas.JobRead.model_validate(job)


@router.get(
    "/{job_id}",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Get Job",
)
async def get_job(job_id: UUID, db: DBDep) -> schemas.JobRead:
    job = await JobService(db).get_job(job_id)
    return schemas.JobRead.model_validate(job)


@router.patch(
    "/{job_id}",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Update Job",
    description="Owning client edits job content. Lifecycle fields cannot be patched.",
)
async def update_job(
    job_id: UUID, payload: schemas.JobUpdate, db: DBDep, actor: ActorDep
) -> schemas.JobRead:
    job = await JobService(db).update_job(actor, job_id, payload)
    return schemas.JobRead.model_validate(job)


@router.delete(
    "/{job_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Job",
    description="Owning client or admin deletes a job and its applications.",
)
async def delete_job(job_id: UUID, db: DBDep, actor: ActorDep) -> MessageResponse:
    await JobService(db).delete_job(actor, job_id)
    return MessageResponse(detail="Job deleted successfully")


# ---------------------------------------------------
# Lifecycle
# ---------------------------------------------------
@router.post(
    "/{job_id}/claim",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Claim Job",
    description="Worker takes an open job directly. Requires Worker role.",
)
async def claim_job(job_id: UUID, db: DBDep, actor: ActorDep) -> schemas.JobRead:
    job = await JobService(db).claim_job(actor, job_id)
    return schemas.JobRead.model_validate(job)


@router.put(
    "/{job_id}/complete",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Complete Job",
    description="Owning client completes the job, or records a confirmation under mutual completion.",
)
async def complete_job(job_id: UUID, db: DBDep, actor: ActorDep) -> schemas.JobRead:
    job = await JobService(db).complete_job(actor, job_id)
    return schemas.JobRead.model_validate(job)


@router.put(
    "/{job_id}/cancel",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Cancel Job",
    description="Owning client or admin cancels an open or in-progress job with an optional reason.",
)
async def cancel_job(
    job_id: UUID,
    db: DBDep,
    actor: ActorDep,
    payload: schemas.CancelJobRequest | None = None,
) -> schemas.JobRead:
    reason = payload.cancel_reason if payload else None
    job = await JobService(db).cancel_job(actor, job_id, reason)
    return schemas.JobRead.model_validate(job)
