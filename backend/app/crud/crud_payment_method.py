"""Lookups for payment methods."""

from typing import Optional

from sqlalchemy.orm import Session

from backend.app.models.payment_method import PaymentMethod


class CRUDPaymentMethod:
    def find_active_by_id(self, db: Session, payment_method_id: int) -> Optional[PaymentMethod]:
        return (
            db.query(PaymentMethod)
            .filter(
                PaymentMethod.id == payment_method_id,
                PaymentMethod.is_active.is_(True),
                PaymentMethod.deleted_at.is_(None),
            )
            .first()
        )


payment_method_crud = CRUDPaymentMethod()
