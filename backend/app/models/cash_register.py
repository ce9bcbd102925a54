"""Cash registers, their opening/closing sessions and the movements booked on them."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class CashRegisterSessionStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class CashRegisterTransactionType(str, Enum):
    CASH_IN_POS_SALE = "cash_in_pos_sale"
    CASH_OUT_EXPENSE = "cash_out_expense"
    CASH_IN_OTHER = "cash_in_other"
    CASH_OUT_OTHER = "cash_out_other"
    CASH_DEPOSIT_TO_BANK = "cash_deposit_to_bank"
    CASH_WITHDRAWAL_FROM_BANK = "cash_withdrawal_from_bank"
    OPENING_FLOAT = "opening_float"
    CLOSING_REMOVAL = "closing_removal"


class CashRegister(Base):
    __tablename__ = "cash_registers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=False, index=True)
    current_balance = Column(Numeric(15, 4), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    currency = relationship("Currency")
    sessions = relationship("CashRegisterSession", back_populates="cash_register")


class CashRegisterSession(Base):
    __tablename__ = "cash_register_sessions"

    id = Column(Integer, primary_key=True, index=True)
    cash_register_id = Column(Integer, ForeignKey("cash_registers.id"), nullable=False, index=True)
    opened_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    closed_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    opening_timestamp = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    closing_timestamp = Column(DateTime(timezone=True), nullable=True)
    opening_balance = Column(Numeric(15, 4), nullable=False, default=0)
    closing_balance_actual = Column(Numeric(15, 4), nullable=True)
    status = Column(String(10), nullable=False, default=CashRegisterSessionStatus.OPEN.value)
    notes = Column(Text, nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    cash_register = relationship("CashRegister", back_populates="sessions")
    transactions = relationship("CashRegisterTransaction", back_populates="session")

    @property
    def is_open(self) -> bool:
        return self.status == CashRegisterSessionStatus.OPEN.value


class CashRegisterTransaction(Base):
    __tablename__ = "cash_register_transactions"

    id = Column(Integer, primary_key=True, index=True)
    cash_register_session_id = Column(Integer, ForeignKey("cash_register_sessions.id"), nullable=False, index=True)
    transaction_timestamp = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    type = Column(String(30), nullable=False, index=True)
    # Always a positive magnitude; ``type`` carries the direction.
    amount = Column(Numeric(15, 4), nullable=False)
    description = Column(Text, nullable=False)
    payment_method_id = Column(Integer, ForeignKey("payment_methods.id"), nullable=True)
    related_sales_order_id = Column(Integer, ForeignKey("sales_orders.id"), nullable=True, index=True)
    payment_id = Column(Integer, ForeignKey("payments.id"), nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    session = relationship("CashRegisterSession", back_populates="transactions")
