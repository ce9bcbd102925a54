"""Lookups for currencies."""

from typing import Optional

from sqlalchemy.orm import Session

from backend.app.models.currency import Currency


class CRUDCurrency:
    def find_active_by_id(self, db: Session, currency_id: int) -> Optional[Currency]:
        return (
            db.query(Currency)
            .filter(Currency.id == currency_id, Currency.is_active.is_(True), Currency.deleted_at.is_(None))
            .first()
        )


currency_crud = CRUDCurrency()
