"""Persistence for payment rows."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from backend.app.models.payment import Payment

SORTABLE_FIELDS = {
    "payment_date": Payment.payment_date,
    "amount": Payment.amount,
    "id": Payment.id,
    "created_at": Payment.created_at,
}


@dataclass
class PaymentFilters:
    direction: Optional[str] = None
    payment_method_id: Optional[int] = None
    currency_id: Optional[int] = None
    customer_id: Optional[int] = None
    supplier_id: Optional[int] = None
    customer_invoice_id: Optional[int] = None
    supplier_invoice_id: Optional[int] = None
    bank_account_id: Optional[int] = None
    cash_register_session_id: Optional[int] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    q: Optional[str] = None
    include_reversed: bool = False


class CRUDPayment:
    def create(self, db: Session, *, values: dict, recorded_by_user_id: int) -> Payment:
        payment = Payment(recorded_by_user_id=recorded_by_user_id, **values)
        db.add(payment)
        db.flush()  # obtain payment id for ledger and audit rows
        return payment

    def get(self, db: Session, payment_id: int, *, include_reversed: bool = True) -> Optional[Payment]:
        query = db.query(Payment).filter(Payment.id == payment_id)
        if not include_reversed:
            query = query.filter(Payment.deleted_at.is_(None))
        return query.first()

    def get_for_update(self, db: Session, payment_id: int) -> Optional[Payment]:
        """Load a payment holding its row lock until the transaction ends."""
        return (
            db.query(Payment)
            .populate_existing()
            .with_for_update()
            .filter(Payment.id == payment_id)
            .first()
        )

    def tombstone(self, db: Session, *, payment_id: int, notes: str, deleted_at: datetime) -> bool:
        """Mark a live payment as reversed; False when another caller got there first."""
        updated = (
            db.query(Payment)
            .filter(Payment.id == payment_id, Payment.deleted_at.is_(None))
            .update({Payment.deleted_at: deleted_at, Payment.notes: notes}, synchronize_session=False)
        )
        return updated == 1

    def get_multi(
        self,
        db: Session,
        *,
        filters: PaymentFilters,
        skip: int = 0,
        limit: int = 50,
        sort_by: str = "payment_date",
        sort_order: str = "desc",
    ) -> Tuple[List[Payment], int]:
        query = self._apply_filters(db.query(Payment), filters)
        total = query.count()

        sort_column = SORTABLE_FIELDS[sort_by]
        if sort_order == "asc":
            query = query.order_by(sort_column.asc(), Payment.id.asc())
        else:
            query = query.order_by(sort_column.desc(), Payment.id.desc())
        return query.offset(skip).limit(limit).all(), total

    def _apply_filters(self, query: Query, filters: PaymentFilters) -> Query:
        if not filters.include_reversed:
            query = query.filter(Payment.deleted_at.is_(None))
        if filters.direction:
            query = query.filter(Payment.direction == filters.direction)

        exact_matches = (
            (Payment.payment_method_id, filters.payment_method_id),
            (Payment.currency_id, filters.currency_id),
            (Payment.customer_id, filters.customer_id),
            (Payment.supplier_id, filters.supplier_id),
            (Payment.customer_invoice_id, filters.customer_invoice_id),
            (Payment.supplier_invoice_id, filters.supplier_invoice_id),
            (Payment.bank_account_id, filters.bank_account_id),
            (Payment.cash_register_session_id, filters.cash_register_session_id),
        )
        for column, value in exact_matches:
            if value is not None:
                query = query.filter(column == value)

        if filters.from_date is not None:
            query = query.filter(Payment.payment_date >= filters.from_date)
        if filters.to_date is not None:
            query = query.filter(Payment.payment_date <= filters.to_date)
        if filters.q:
            pattern = f"%{filters.q}%"
            query = query.filter(or_(Payment.reference_number.ilike(pattern), Payment.notes.ilike(pattern)))
        return query


payment_crud = CRUDPayment()
