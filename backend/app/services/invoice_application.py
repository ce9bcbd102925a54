"""Applies payment amounts to the invoice a payment settles."""

import logging
from decimal import Decimal
from typing import Optional, Union

from sqlalchemy.orm import Session

from backend.app.core.errors import ServerFaultError
from backend.app.crud.crud_invoice import customer_invoice_crud, supplier_invoice_crud
from backend.app.models.customer_invoice import CustomerInvoice
from backend.app.models.invoice import CLOSED_INVOICE_STATUSES, InvoiceStatus
from backend.app.models.supplier_invoice import SupplierInvoice
from backend.app.services.payment_refs import CustomerInvoiceRef, DocumentRef, SupplierInvoiceRef

logger = logging.getLogger(__name__)


def derive_invoice_status(amount_paid: Decimal, total_amount: Decimal) -> InvoiceStatus:
    if amount_paid <= 0:
        return InvoiceStatus.UNPAID
    if amount_paid >= total_amount:
        return InvoiceStatus.PAID
    return InvoiceStatus.PARTIALLY_PAID


class InvoiceApplicationEngine:
    def __init__(self, *, customer_invoices=customer_invoice_crud, supplier_invoices=supplier_invoice_crud):
        self.customer_invoices = customer_invoices
        self.supplier_invoices = supplier_invoices

    def apply_amount(
        self,
        db: Session,
        document: Optional[DocumentRef],
        signed_amount: Decimal,
        acting_user_id: int,
    ) -> Optional[Union[CustomerInvoice, SupplierInvoice]]:
        """Move ``signed_amount`` onto the invoice's paid total and refresh its status.

        Orders and payments without a document are left untouched. Returns the
        updated invoice, or None when nothing was applied.
        """
        if isinstance(document, CustomerInvoiceRef):
            invoices = self.customer_invoices
        elif isinstance(document, SupplierInvoiceRef):
            invoices = self.supplier_invoices
        else:
            return None

        invoice = invoices.apply_payment_delta(
            db, invoice_id=document.id, signed_amount=signed_amount, user_id=acting_user_id
        )
        if invoice is None:
            raise ServerFaultError(f"Invoice ID {document.id} disappeared while applying a payment.")

        amount_paid = Decimal(invoice.amount_paid)
        total_amount = Decimal(invoice.total_amount)
        invoice.amount_remaining = total_amount - amount_paid
        if invoice.status not in CLOSED_INVOICE_STATUSES:
            invoice.status = derive_invoice_status(amount_paid, total_amount).value
        db.flush()

        logger.info(
            "Applied payment amount to invoice",
            extra={
                "invoice_kind": document.kind,
                "invoice_id": document.id,
                "signed_amount": str(signed_amount),
                "amount_paid": str(amount_paid),
                "status": invoice.status,
            },
        )
        return invoice
