# tests/job/test_job_routes.py
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from workhive.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from workhive.database.enums import JobStatus
from workhive.database.models import User
from workhive.job import schemas as job_schemas
from workhive.job import services as job_services
from workhive.job.models import Job

# --- Helper ---


def as_db_job(job_read: job_schemas.JobRead, **overrides: object) -> MagicMock:
    """Mock Job DB model built from a JobRead."""
    return MagicMock(spec=Job, **{**job_read.model_dump(), **overrides})


def job_payload() -> dict:
    return {
        "title": "Fix kitchen sink",
        "description": "Leaking pipe under the sink.",
        "category": "plumbing",
        "budget": 150,
        "location": "Lagos",
        "skills": ["plumbing"],
        "deadline": (datetime.now(timezone.utc) + timedelta(days=3)).isoformat(),
    }


# --- Tests ---


@pytest.mark.asyncio
@patch.object(job_services.JobService, "create_job", new_callable=AsyncMock)
async def test_create_job_success(
    mock_create_job: AsyncMock,
    fake_job_read: job_schemas.JobRead,
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_create_job.return_value = as_db_job(fake_job_read)

    response = await async_client.post("/jobs", json=job_payload())

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["client_id"] == str(mock_current_client_user.id)
    assert data["status"] == JobStatus.OPEN.value
    actor, payload = mock_create_job.await_args.args
    assert actor.id == mock_current_client_user.id
    assert payload.title == "Fix kitchen sink"


@pytest.mark.asyncio
async def test_create_job_forbidden_for_worker(
    mock_current_worker_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.post("/jobs", json=job_payload())
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_create_job_invalid_payload(
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    payload = {**job_payload(), "budget": -5}
    response = await async_client.post("/jobs", json=payload)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_job_requires_authentication(
    async_client: AsyncClient, override_get_db: None
) -> None:
    response = await async_client.post("/jobs", json=job_payload())
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
@patch.object(job_services.JobService, "list_open_jobs", new_callable=AsyncMock)
async def test_list_open_jobs_parses_filters(
    mock_list: AsyncMock,
    fake_job_read: job_schemas.JobRead,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_list.return_value = [as_db_job(fake_job_read)]

    response = await async_client.get(
        "/jobs", params={"category": "plumbing", "skills": "plumbing, welding ,"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()[0]["id"] == str(fake_job_read.id)
    filters = mock_list.await_args.args[0]
    assert filters.category == "plumbing"
    assert filters.location is None
    assert filters.skills == ["plumbing", "welding"]


@pytest.mark.asyncio
@patch.object(job_services.JobService, "list_jobs_for_user", new_callable=AsyncMock)
async def test_list_my_jobs_paginated(
    mock_list: AsyncMock,
    fake_job_read: job_schemas.JobRead,
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_list.return_value = ([as_db_job(fake_job_read)], 3)

    response = await async_client.get("/jobs/mine", params={"skip": 0, "limit": 1})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_count"] == 3
    assert data["has_next_page"] is True
    assert len(data["items"]) == 1


@pytest.mark.asyncio
@patch.object(job_services.JobService, "get_job", new_callable=AsyncMock)
async def test_get_job_not_found(
    mock_get: AsyncMock, async_client: AsyncClient, override_get_db: None
) -> None:
    mock_get.side_effect = NotFoundError("Job not found.")
    response = await async_client.get(f"/jobs/{uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Job not found."


@pytest.mark.asyncio
async def test_update_job_rejects_status_field(
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.patch(f"/jobs/{uuid4()}", json={"status": "completed"})
    assert response.status_code == 422


@pytest.mark.asyncio
@patch.object(job_services.JobService, "claim_job", new_callable=AsyncMock)
async def test_claim_job_success(
    mock_claim: AsyncMock,
    fake_job_read: job_schemas.JobRead,
    mock_current_worker_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_claim.return_value = as_db_job(
        fake_job_read, status=JobStatus.IN_PROGRESS, worker_id=mock_current_worker_user.id
    )

    response = await async_client.post(f"/jobs/{fake_job_read.id}/claim")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["worker_id"] == str(mock_current_worker_user.id)


@pytest.mark.asyncio
@patch.object(job_services.JobService, "claim_job", new_callable=AsyncMock)
async def test_claim_job_conflict(
    mock_claim: AsyncMock,
    mock_current_worker_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_claim.side_effect = ConflictError("Cannot claim a job with status 'in_progress'.")
    response = await async_client.post(f"/jobs/{uuid4()}/claim")
    assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.asyncio
@patch.object(job_services.JobService, "cancel_job", new_callable=AsyncMock)
async def test_cancel_job_passes_reason(
    mock_cancel: AsyncMock,
    fake_job_read: job_schemas.JobRead,
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_cancel.return_value = as_db_job(
        fake_job_read, status=JobStatus.CANCELLED, cancel_reason="Changed plans"
    )

    response = await async_client.put(
        f"/jobs/{fake_job_read.id}/cancel", json={"cancel_reason": "Changed plans"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == JobStatus.CANCELLED.value
    _, job_id, reason = mock_cancel.await_args.args
    assert job_id == fake_job_read.id
    assert reason == "Changed plans"


@pytest.mark.asyncio
@patch.object(job_services.JobService, "cancel_job", new_callable=AsyncMock)
async def test_cancel_job_forbidden(
    mock_cancel: AsyncMock,
    mock_current_worker_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_cancel.side_effect = ForbiddenError("Not authorized to cancel this job.")
    response = await async_client.put(f"/jobs/{uuid4()}/cancel")
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Not authorized to cancel this job."


@pytest.mark.asyncio
@patch.object(job_services.JobService, "delete_job", new_callable=AsyncMock)
async def test_delete_job_success(
    mock_delete: AsyncMock,
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_delete.return_value = None
    response = await async_client.delete(f"/jobs/{uuid4()}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"detail": "Job deleted successfully"}


@pytest.mark.asyncio
async def test_available_jobs_requires_worker(
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.get("/jobs/available")
    assert response.status_code == status.HTTP_403_FORBIDDEN
