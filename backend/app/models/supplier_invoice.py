"""Supplier invoice model; settled by outbound payments."""

from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.models.invoice import InvoicePaymentStateMixin


class SupplierInvoice(InvoicePaymentStateMixin, Base):
    __tablename__ = "supplier_invoices"

    id = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)

    supplier = relationship("Supplier")
