"""Customer model (the party side of inbound payments)."""

from sqlalchemy import Column, DateTime, Integer, String

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    company_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def display_name(self) -> str:
        if self.company_name:
            return self.company_name
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) or f"Customer #{self.id}"
