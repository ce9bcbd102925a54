"""Bank account lookups and balance mutation."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from backend.app.models.bank_account import BankAccount


class CRUDBankAccount:
    def find_by_id(self, db: Session, account_id: int) -> Optional[BankAccount]:
        return db.query(BankAccount).filter(BankAccount.id == account_id, BankAccount.deleted_at.is_(None)).first()

    def apply_balance_delta(self, db: Session, *, account_id: int, signed_amount: Decimal) -> Optional[BankAccount]:
        updated = (
            db.query(BankAccount)
            .filter(BankAccount.id == account_id)
            .update(
                {BankAccount.current_balance: BankAccount.current_balance + signed_amount},
                synchronize_session=False,
            )
        )
        if not updated:
            return None
        return db.query(BankAccount).populate_existing().filter(BankAccount.id == account_id).one()


bank_account_crud = CRUDBankAccount()
