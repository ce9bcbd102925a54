from decimal import Decimal

import pytest

from backend.app.core.errors import ServerFaultError
from backend.app.models.bank_account import BankAccount
from backend.app.models.cash_register import CashRegisterTransactionType
from backend.app.models.payment import Payment
from backend.app.services.financial_ledger import (
    FinancialAccountLedger,
    cash_transaction_type,
    describe_cash_payment,
)
from backend.app.services.payment_refs import BankAccountRef, CashRegisterSessionRef


def test_bank_account_delta_returns_new_balance(db, ref):
    ledger = FinancialAccountLedger()

    balance = ledger.apply_delta(
        db, BankAccountRef(ref.bank_account_id), Decimal("-120"), payment=None, acting_user_id=ref.user_id
    )
    db.commit()

    assert balance == Decimal("380")
    assert db.get(BankAccount, ref.bank_account_id).current_balance == Decimal("380")


def test_missing_bank_account_is_server_fault(db, ref):
    with pytest.raises(ServerFaultError):
        FinancialAccountLedger().apply_delta(
            db, BankAccountRef(404), Decimal("10"), payment=None, acting_user_id=ref.user_id
        )
    db.rollback()


def test_missing_cash_session_is_server_fault(db, ref):
    with pytest.raises(ServerFaultError):
        FinancialAccountLedger().apply_delta(
            db, CashRegisterSessionRef(404), Decimal("10"), payment=None, acting_user_id=ref.user_id
        )
    db.rollback()


def test_cash_transaction_type_follows_sign_and_reversal():
    assert cash_transaction_type(Decimal("5"), reversal=False) is CashRegisterTransactionType.CASH_IN_POS_SALE
    assert cash_transaction_type(Decimal("-5"), reversal=False) is CashRegisterTransactionType.CASH_OUT_OTHER
    assert cash_transaction_type(Decimal("5"), reversal=True) is CashRegisterTransactionType.CASH_IN_OTHER
    assert cash_transaction_type(Decimal("-5"), reversal=True) is CashRegisterTransactionType.CASH_OUT_OTHER


def test_cash_payment_description():
    assert describe_cash_payment(Payment(direction="inbound", customer_invoice_id=7)) == "Payment for Invoice #7"
    assert describe_cash_payment(Payment(direction="inbound", sales_order_id=3)) == "Payment for Sales Order #3"
    assert describe_cash_payment(Payment(direction="inbound", customer_id=2)) == "Payment from Customer #2"
    assert describe_cash_payment(Payment(direction="inbound")) == "Payment received"
    assert describe_cash_payment(Payment(direction="outbound")) == "Payment made"
