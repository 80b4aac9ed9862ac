"""
backend/workhive/invoice/services.py

Invoice Service Layer
Billing records attached to jobs. The assigned worker raises an invoice
against an in-progress or completed job; the job's client settles or
cancels it. Invoices never change job state.
"""

import logging
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from workhive.auth.schemas import Actor
from workhive.core import policy
from workhive.core.exceptions import ConflictError, NotFoundError
from workhive.database.base import utcnow
from workhive.database.enums import InvoiceStatus, JobStatus
from workhive.database.session import atomic
from workhive.invoice import schemas
from workhive.invoice.models import Invoice
from workhive.job.services import JobService, require_status

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service class for invoice operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_invoice_or_404(self, invoice_id: UUID) -> Invoice:
        invoice = await self.db.get(Invoice, invoice_id, populate_existing=True)
        if not invoice:
            logger.warning(f"[INVOICE] Invoice not found: invoice_id={invoice_id}")
            raise NotFoundError("Invoice not found.")
        return invoice

    async def create_invoice(self, actor: Actor, payload: schemas.InvoiceCreate) -> Invoice:
        async with atomic(self.db):
            job = await JobService(self.db).get_job(payload.job_id)
            policy.ensure_can_bill_job(actor, job)
            require_status(job, JobStatus.IN_PROGRESS, JobStatus.COMPLETED, action="invoice")

            invoice = Invoice(
                job_id=job.id,
                client_id=job.client_id,
                worker_id=actor.id,
                amount=payload.amount,
                description=payload.description,
                due_date=payload.due_date,
                status=InvoiceStatus.PENDING,
            )
            self.db.add(invoice)
            await self.db.flush()

        logger.info(
            f"[INVOICE] Invoice {invoice.id} created for job={job.id} by worker={actor.id} "
            f"amount={invoice.amount}"
        )
        return invoice

    async def list_invoices(self, actor: Actor, status: InvoiceStatus | None = None) -> list[Invoice]:
        """Admins see every invoice; everyone else sees invoices they are party to."""
        stmt = select(Invoice)
        if not actor.is_admin:
            stmt = stmt.where(or_(Invoice.client_id == actor.id, Invoice.worker_id == actor.id))
        if status is not None:
            stmt = stmt.where(Invoice.status == status)
        stmt = stmt.order_by(Invoice.created_at.desc()).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_invoice(self, actor: Actor, invoice_id: UUID) -> Invoice:
        invoice = await self._get_invoice_or_404(invoice_id)
        policy.ensure_can_read_invoice(actor, invoice)
        return invoice

    async def update_invoice_status(
        self, actor: Actor, invoice_id: UUID, status: InvoiceStatus
    ) -> Invoice:
        """pending -> paid or pending -> cancelled, by the invoice's client or an admin."""
        async with atomic(self.db):
            invoice = await self._get_invoice_or_404(invoice_id)
            policy.ensure_can_update_invoice(actor, invoice)
            if invoice.status != InvoiceStatus.PENDING:
                raise ConflictError(f"Invoice is already {invoice.status.value}.")

            result = await self.db.execute(
                update(Invoice)
                .where(Invoice.id == invoice_id, Invoice.status == InvoiceStatus.PENDING)
                .values(status=status, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise ConflictError("Invoice is no longer pending.")
            invoice = await self._get_invoice_or_404(invoice_id)

        logger.info(f"[INVOICE] Invoice {invoice_id} updated by user={actor.id} -> {status.value}")
        return invoice
