"""Running balances of bank accounts and cash registers."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from backend.app.core.errors import ServerFaultError
from backend.app.crud.crud_bank_account import bank_account_crud
from backend.app.crud.crud_cash_register import cash_register_crud
from backend.app.models.cash_register import CashRegisterTransactionType
from backend.app.models.payment import Payment, PaymentDirection
from backend.app.services.payment_refs import AccountRef, BankAccountRef, CashRegisterSessionRef

logger = logging.getLogger(__name__)


def describe_cash_payment(payment: Payment) -> str:
    if payment.customer_invoice_id is not None:
        return f"Payment for Invoice #{payment.customer_invoice_id}"
    if payment.supplier_invoice_id is not None:
        return f"Payment for Invoice #{payment.supplier_invoice_id}"
    if payment.sales_order_id is not None:
        return f"Payment for Sales Order #{payment.sales_order_id}"
    if payment.purchase_order_id is not None:
        return f"Payment for Purchase Order #{payment.purchase_order_id}"
    if payment.customer_id is not None:
        return f"Payment from Customer #{payment.customer_id}"
    if payment.supplier_id is not None:
        return f"Payment to Supplier #{payment.supplier_id}"
    return "Payment received" if payment.payment_direction is PaymentDirection.INBOUND else "Payment made"


def cash_transaction_type(signed_amount: Decimal, reversal: bool) -> CashRegisterTransactionType:
    if signed_amount >= 0:
        return CashRegisterTransactionType.CASH_IN_OTHER if reversal else CashRegisterTransactionType.CASH_IN_POS_SALE
    return CashRegisterTransactionType.CASH_OUT_OTHER


class FinancialAccountLedger:
    """Adds signed deltas to the account a payment moved money through.

    A cash register session is not itself a balance holder: the delta lands on
    the session's register and a register transaction is booked against the
    session so the movement shows up in the register's cash journal.
    """

    def __init__(self, *, bank_accounts=bank_account_crud, cash_registers=cash_register_crud):
        self.bank_accounts = bank_accounts
        self.cash_registers = cash_registers

    def apply_delta(
        self,
        db: Session,
        account: AccountRef,
        signed_amount: Decimal,
        *,
        payment: Payment,
        acting_user_id: int,
        reversal: bool = False,
    ) -> Decimal:
        """Apply ``signed_amount`` and return the account's new balance."""
        if isinstance(account, BankAccountRef):
            return self._apply_to_bank_account(db, account, signed_amount)
        if isinstance(account, CashRegisterSessionRef):
            return self._apply_to_cash_session(db, account, signed_amount, payment, acting_user_id, reversal)
        raise ServerFaultError(f"Unsupported financial account reference: {account!r}")

    def _apply_to_bank_account(self, db: Session, account: BankAccountRef, signed_amount: Decimal) -> Decimal:
        bank_account = self.bank_accounts.apply_balance_delta(db, account_id=account.id, signed_amount=signed_amount)
        if bank_account is None:
            raise ServerFaultError(f"Bank Account ID {account.id} disappeared while updating its balance.")
        logger.info(
            "Bank account balance updated",
            extra={
                "bank_account_id": account.id,
                "signed_amount": str(signed_amount),
                "balance": str(bank_account.current_balance),
            },
        )
        return Decimal(bank_account.current_balance)

    def _apply_to_cash_session(
        self,
        db: Session,
        account: CashRegisterSessionRef,
        signed_amount: Decimal,
        payment: Payment,
        acting_user_id: int,
        reversal: bool,
    ) -> Decimal:
        session = self.cash_registers.find_session_by_id(db, account.id)
        if session is None or session.cash_register is None:
            raise ServerFaultError(f"Cash Register Session ID {account.id} has no cash register.")

        register = self.cash_registers.apply_balance_delta(
            db, register_id=session.cash_register_id, signed_amount=signed_amount
        )
        if register is None:
            raise ServerFaultError(f"Cash Register ID {session.cash_register_id} disappeared while updating its balance.")

        if reversal:
            description = f"Reversal of payment #{payment.id}"
        else:
            description = describe_cash_payment(payment)
        self.cash_registers.record_transaction(
            db,
            session_id=session.id,
            type=cash_transaction_type(signed_amount, reversal),
            amount=abs(signed_amount),
            description=description,
            user_id=acting_user_id,
            payment_id=payment.id,
            payment_method_id=payment.payment_method_id,
            related_sales_order_id=payment.sales_order_id,
        )
        logger.info(
            "Cash register balance updated",
            extra={
                "cash_register_id": register.id,
                "cash_register_session_id": session.id,
                "signed_amount": str(signed_amount),
                "balance": str(register.current_balance),
            },
        )
        return Decimal(register.current_balance)
