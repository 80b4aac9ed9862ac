"""
backend/workhive/invoice/routes.py

Invoice Routes
- Create an invoice (assigned Worker)
- List invoices visible to the current user, optionally by status
- Read an invoice
- Mark an invoice paid or cancelled (invoice Client or Admin)
"""

from uuid import UUID

from fastapi import APIRouter, Query, status

from workhive.core.dependencies import ActorDep, DBDep
from workhive.database.enums import InvoiceStatus
from workhive.invoice import schemas
from workhive.invoice.services import InvoiceService

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.post(
    "",
    response_model=schemas.InvoiceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Invoice",
    description="The worker assigned to an in-progress or completed job bills it.",
)
async def create_invoice(
    payload: schemas.InvoiceCreate, db: DBDep, actor: ActorDep
) -> schemas.InvoiceRead:
    invoice = await InvoiceService(db).create_invoice(actor, payload)
    return schemas.InvoiceRead.model_validate(invoice)


@router.get(
    "",
    response_model=list[schemas.InvoiceRead],
    status_code=status.HTTP_200_OK,
    summary="List Invoices",
)
async def list_invoices(
    db: DBDep,
    actor: ActorDep,
    invoice_status: InvoiceStatus | None = Query(None, alias="status"),
) -> list[schemas.InvoiceRead]:
    invoices = await InvoiceService(db).list_invoices(actor, invoice_status)
    return [schemas.InvoiceRead.model_validate(i) for i in invoices]


@router.get(
    "/{invoice_id}",
    response_model=schemas.InvoiceRead,
    status_code=status.HTTP_200_OK,
    summary="Get Invoice",
)
async def get_invoice(invoice_id: UUID, db: DBDep, actor: ActorDep) -> schemas.InvoiceRead:
    invoice = await InvoiceService(db).get_invoice(actor, invoice_id)
    return schemas.InvoiceRead.model_validate(invoice)


@router.patch(
    "/{invoice_id}/status",
    response_model=schemas.InvoiceRead,
    status_code=status.HTTP_200_OK,
    summary="Update Invoice Status",
)
async def update_invoice_status(
    invoice_id: UUID,
    payload: schemas.InvoiceStatusUpdate,
    db: DBDep,
    actor: ActorDep,
) -> schemas.InvoiceRead:
    invoice = await InvoiceService(db).update_invoice_status(actor, invoice_id, payload.status)
    return schemas.InvoiceRead.model_validate(invoice)
