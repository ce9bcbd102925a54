"""Payment model: one recorded money movement against a bank account or cash session."""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


# Money columns are Numeric(AMOUNT_PRECISION, AMOUNT_SCALE).
AMOUNT_PRECISION = 15
AMOUNT_SCALE = 4


class PaymentDirection(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"

    @property
    def account_sign(self) -> int:
        """Sign applied to the financial account when the payment is recorded."""
        return 1 if self is PaymentDirection.INBOUND else -1


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
        CheckConstraint(
            "(bank_account_id IS NOT NULL AND cash_register_session_id IS NULL)"
            " OR (bank_account_id IS NULL AND cash_register_session_id IS NOT NULL)",
            name="ck_payments_single_account",
        ),
        Index("ix_payments_date_direction", "payment_date", "direction"),
        Index("ix_payments_customer_invoice", "customer_id", "customer_invoice_id"),
        Index("ix_payments_supplier_invoice", "supplier_id", "supplier_invoice_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    payment_date = Column(Date, nullable=False)
    amount = Column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=False)
    currency_id = Column(Integer, ForeignKey("currencies.id", ondelete="RESTRICT"), nullable=False, index=True)
    payment_method_id = Column(Integer, ForeignKey("payment_methods.id", ondelete="RESTRICT"), nullable=False, index=True)
    direction = Column(String(10), nullable=False)

    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True)

    customer_invoice_id = Column(Integer, ForeignKey("customer_invoices.id", ondelete="SET NULL"), nullable=True)
    supplier_invoice_id = Column(Integer, ForeignKey("supplier_invoices.id", ondelete="SET NULL"), nullable=True)
    sales_order_id = Column(Integer, ForeignKey("sales_orders.id", ondelete="SET NULL"), nullable=True, index=True)
    purchase_order_id = Column(Integer, ForeignKey("purchase_orders.id", ondelete="SET NULL"), nullable=True, index=True)

    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id", ondelete="RESTRICT"), nullable=True, index=True)
    cash_register_session_id = Column(
        Integer, ForeignKey("cash_register_sessions.id", ondelete="RESTRICT"), nullable=True, index=True
    )

    reference_number = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    recorded_by_user_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    currency = relationship("Currency")
    payment_method = relationship("PaymentMethod")
    customer = relationship("Customer")
    supplier = relationship("Supplier")
    customer_invoice = relationship("CustomerInvoice")
    supplier_invoice = relationship("SupplierInvoice")
    sales_order = relationship("SalesOrder")
    purchase_order = relationship("PurchaseOrder")
    bank_account = relationship("BankAccount")
    cash_register_session = relationship("CashRegisterSession")
    recorded_by_user = relationship("User", back_populates="payments", foreign_keys=[recorded_by_user_id])

    @property
    def is_reversed(self) -> bool:
        return self.deleted_at is not None

    @property
    def payment_direction(self) -> PaymentDirection:
        return PaymentDirection(self.direction)
