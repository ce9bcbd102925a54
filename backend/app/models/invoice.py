"""Payment state shared by customer and supplier invoices."""

from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import declared_attr, relationship

from backend.app.core.time import utc_now


class InvoiceStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    VOIDED = "voided"
    CANCELLED = "cancelled"


# Statuses that forbid recording further payments against the invoice.
TERMINAL_INVOICE_STATUSES = frozenset({InvoiceStatus.PAID.value, InvoiceStatus.VOIDED.value, InvoiceStatus.CANCELLED.value})

# Statuses set outside the payment core; applying amounts never overwrites them.
CLOSED_INVOICE_STATUSES = frozenset({InvoiceStatus.VOIDED.value, InvoiceStatus.CANCELLED.value})


class InvoicePaymentStateMixin:
    invoice_number = Column(String(100), nullable=False)
    invoice_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default=InvoiceStatus.UNPAID.value)
    total_amount = Column(Numeric(15, 4), nullable=False, default=0)
    amount_paid = Column(Numeric(15, 4), nullable=False, default=0)
    amount_remaining = Column(Numeric(15, 4), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @declared_attr
    def currency_id(cls):
        return Column(Integer, ForeignKey("currencies.id"), nullable=False, index=True)

    @declared_attr
    def updated_by_user_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=True)

    @declared_attr
    def currency(cls):
        return relationship("Currency")
