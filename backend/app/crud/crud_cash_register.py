"""Cash register sessions, register balances and register transactions."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from backend.app.models.cash_register import (
    CashRegister,
    CashRegisterSession,
    CashRegisterTransaction,
    CashRegisterTransactionType,
)


class CRUDCashRegister:
    def find_session_by_id(self, db: Session, session_id: int) -> Optional[CashRegisterSession]:
        return (
            db.query(CashRegisterSession)
            .options(joinedload(CashRegisterSession.cash_register))
            .filter(CashRegisterSession.id == session_id, CashRegisterSession.deleted_at.is_(None))
            .first()
        )

    def apply_balance_delta(self, db: Session, *, register_id: int, signed_amount: Decimal) -> Optional[CashRegister]:
        updated = (
            db.query(CashRegister)
            .filter(CashRegister.id == register_id)
            .update(
                {CashRegister.current_balance: CashRegister.current_balance + signed_amount},
                synchronize_session=False,
            )
        )
        if not updated:
            return None
        return db.query(CashRegister).populate_existing().filter(CashRegister.id == register_id).one()

    def record_transaction(
        self,
        db: Session,
        *,
        session_id: int,
        type: CashRegisterTransactionType,
        amount: Decimal,
        description: str,
        user_id: int,
        payment_id: Optional[int] = None,
        payment_method_id: Optional[int] = None,
        related_sales_order_id: Optional[int] = None,
        timestamp: Optional[datetime] = None,
    ) -> CashRegisterTransaction:
        transaction = CashRegisterTransaction(
            cash_register_session_id=session_id,
            type=type.value,
            amount=amount,
            description=description,
            user_id=user_id,
            payment_id=payment_id,
            payment_method_id=payment_method_id,
            related_sales_order_id=related_sales_order_id,
        )
        if timestamp is not None:
            transaction.transaction_timestamp = timestamp
        db.add(transaction)
        db.flush()
        return transaction


cash_register_crud = CRUDCashRegister()
