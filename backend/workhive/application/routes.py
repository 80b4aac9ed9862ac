"""
backend/workhive/application/routes.py

Application Routes
- Apply to a job (Authenticated Worker)
- List applications of a job (owning Client or Admin)
- List my applications
- Read, decide and delete an application
"""

from uuid import UUID

from fastapi import APIRouter, status

from workhive.application import schemas
from workhive.application.services import ApplicationService
from workhive.core.dependencies import ActorDep, DBDep
from workhive.core.schemas import MessageResponse

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post(
    "",
    response_model=schemas.ApplicationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Apply to Job",
    description="Worker applies to an open job. One application per worker and job.",
)
async def create_application(
    payload: schemas.ApplicationCreate, db: DBDep, actor: ActorDep
) -> schemas.ApplicationRead:
    application = await ApplicationService(db).create_application(actor, payload)
    return schemas.ApplicationRead.model_validate(application)


@router.get(
    "/job/{job_id}",
    response_model=list[schemas.ApplicationRead],
    status_code=status.HTTP_200_OK,
    summary="List Applications for Job",
)
async def list_applications_for_job(
    job_id: UUID, db: DBDep, actor: ActorDep
) -> list[schemas.ApplicationRead]:
    applications = await ApplicationService(db).list_applications_for_job(actor, job_id)
    return [schemas.ApplicationRead.model_validate(a) for a in applications]


@router.get(
    "/worker",
    response_model=list[schemas.ApplicationRead],
    status_code=status.HTTP_200_OK,
    summary="List My Applications",
)
async def list_my_applications(db: DBDep, actor: ActorDep) -> list[schemas.ApplicationRead]:
    applications = await ApplicationService(db).list_applications_for_worker(actor)
    return [schemas.ApplicationRead.model_validate(a) for a in applications]


@router.get(
    "/{application_id}",
    response_model=schemas.ApplicationRead,
    status_code=status.HTTP_200_OK,
    summary="Get Application",
)
async def get_application(
    application_id: UUID, db: DBDep, actor: ActorDep
) -> schemas.ApplicationRead:
    application = await ApplicationService(db).get_application(actor, application_id)
    return schemas.ApplicationRead.model_validate(application)


@router.patch(
    "/{application_id}/status",
    response_model=schemas.ApplicationRead,
    status_code=status.HTTP_200_OK,
    summary="Accept or Reject Application",
    description="Owning client accepts (assigning the job) or rejects a pending application.",
)
async def decide_application(
    application_id: UUID,
    payload: schemas.ApplicationDecision,
    db: DBDep,
    actor: ActorDep,
) -> schemas.ApplicationRead:
    application = await ApplicationService(db).decide_application(
        actor, application_id, payload.status
    )
    return schemas.ApplicationRead.model_validate(application)


@router.delete(
    "/{application_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Application",
)
async def delete_application(application_id: UUID, db: DBDep, actor: ActorDep) -> MessageResponse:
    await ApplicationService(db).delete_application(actor, application_id)
    return MessageResponse(detail="Application deleted successfully")
