"""Customer invoice model; settled by inbound payments."""

from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.models.invoice import InvoicePaymentStateMixin


class CustomerInvoice(InvoicePaymentStateMixin, Base):
    __tablename__ = "customer_invoices"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    customer = relationship("Customer")
