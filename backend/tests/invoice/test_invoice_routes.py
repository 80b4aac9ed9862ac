# tests/invoice/test_invoice_routes.py
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from workhive.core.exceptions import ConflictError, ForbiddenError
from workhive.database.enums import InvoiceStatus
from workhive.database.models import User
from workhive.invoice import schemas as invoice_schemas
from workhive.invoice import services as invoice_services
from workhive.invoice.models import Invoice

# --- Helper ---


def as_db_invoice(invoice_read: invoice_schemas.InvoiceRead, **overrides: object) -> MagicMock:
    """Mock Invoice DB model built from an InvoiceRead."""
    return MagicMock(spec=Invoice, **{**invoice_read.model_dump(), **overrides})


# --- Tests ---


@pytest.mark.asyncio
@patch.object(invoice_services.InvoiceService, "create_invoice", new_callable=AsyncMock)
async def test_create_invoice_success(
    mock_create: AsyncMock,
    fake_invoice_read: invoice_schemas.InvoiceRead,
    mock_current_worker_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_create.return_value = as_db_invoice(fake_invoice_read)

    response = await async_client.post(
        "/invoices",
        json={
            "job_id": str(fake_invoice_read.job_id),
            "amount": 150,
            "description": "Sink repair",
            "due_date": (datetime.now(timezone.utc) + timedelta(days=14)).isoformat(),
        },
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == InvoiceStatus.PENDING.value
    _, payload = mock_create.await_args.args
    assert payload.amount == 150


@pytest.mark.asyncio
@patch.object(invoice_services.InvoiceService, "create_invoice", new_callable=AsyncMock)
async def test_create_invoice_forbidden(
    mock_create: AsyncMock,
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_create.side_effect = ForbiddenError("Only the assigned worker can invoice this job.")

    response = await async_client.post(
        "/invoices",
        json={
            "job_id": str(uuid4()),
            "amount": 10,
            "description": "Deposit",
            "due_date": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
        },
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
@patch.object(invoice_services.InvoiceService, "list_invoices", new_callable=AsyncMock)
async def test_list_invoices_status_filter(
    mock_list: AsyncMock,
    fake_invoice_read: invoice_schemas.InvoiceRead,
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_list.return_value = [as_db_invoice(fake_invoice_read)]

    response = await async_client.get("/invoices", params={"status": "pending"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()[0]["id"] == str(fake_invoice_read.id)
    _, invoice_status = mock_list.await_args.args
    assert invoice_status == InvoiceStatus.PENDING


@pytest.mark.asyncio
async def test_list_invoices_unknown_status(
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.get("/invoices", params={"status": "overdue"})
    assert response.status_code == 422


@pytest.mark.asyncio
@patch.object(invoice_services.InvoiceService, "update_invoice_status", new_callable=AsyncMock)
async def test_mark_invoice_paid(
    mock_update: AsyncMock,
    fake_invoice_read: invoice_schemas.InvoiceRead,
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_update.return_value = as_db_invoice(fake_invoice_read, status=InvoiceStatus.PAID)

    response = await async_client.patch(
        f"/invoices/{fake_invoice_read.id}/status", json={"status": "paid"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "paid"


@pytest.mark.asyncio
@patch.object(invoice_services.InvoiceService, "update_invoice_status", new_callable=AsyncMock)
async def test_settled_invoice_conflict(
    mock_update: AsyncMock,
    mock_current_client_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_update.side_effect = ConflictError("Invoice is already paid.")

    response = await async_client.patch(f"/invoices/{uuid4()}/status", json={"status": "cancelled"})

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Invoice is already paid."
