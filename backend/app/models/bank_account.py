"""Bank account model holding a running balance."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class BankAccount(Base):
    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True, index=True)
    account_name = Column(String(255), nullable=False)
    bank_name = Column(String(255), nullable=False)
    account_number = Column(String(100), nullable=True)
    iban = Column(String(50), nullable=True)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=False, index=True)
    initial_balance = Column(Numeric(15, 4), nullable=False, default=0)
    current_balance = Column(Numeric(15, 4), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    currency = relationship("Currency")
