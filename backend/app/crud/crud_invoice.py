"""Invoice lookups and the paid-amount mutation used by payments."""

from decimal import Decimal
from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from backend.app.models.customer_invoice import CustomerInvoice
from backend.app.models.supplier_invoice import SupplierInvoice

InvoiceT = TypeVar("InvoiceT", CustomerInvoice, SupplierInvoice)


class CRUDInvoice(Generic[InvoiceT]):
    def __init__(self, model: Type[InvoiceT]):
        self.model = model

    def find_by_id(self, db: Session, invoice_id: int) -> Optional[InvoiceT]:
        return db.query(self.model).filter(self.model.id == invoice_id, self.model.deleted_at.is_(None)).first()

    def apply_payment_delta(
        self, db: Session, *, invoice_id: int, signed_amount: Decimal, user_id: int
    ) -> Optional[InvoiceT]:
        """Atomically add ``signed_amount`` to ``amount_paid`` and return the fresh row."""
        model = self.model
        updated = (
            db.query(model)
            .filter(model.id == invoice_id, model.deleted_at.is_(None))
            .update(
                {model.amount_paid: model.amount_paid + signed_amount, model.updated_by_user_id: user_id},
                synchronize_session=False,
            )
        )
        if not updated:
            return None
        return db.query(model).populate_existing().filter(model.id == invoice_id).one()


customer_invoice_crud: CRUDInvoice[CustomerInvoice] = CRUDInvoice(CustomerInvoice)
supplier_invoice_crud: CRUDInvoice[SupplierInvoice] = CRUDInvoice(SupplierInvoice)

