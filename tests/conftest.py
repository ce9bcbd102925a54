import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_bizledger.db")
os.environ.setdefault("ENVIRONMENT", "test")

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.bank_account import BankAccount
from backend.app.models.cash_register import CashRegister, CashRegisterSession, CashRegisterSessionStatus
from backend.app.models.currency import Currency
from backend.app.models.customer import Customer
from backend.app.models.customer_invoice import CustomerInvoice
from backend.app.models.order import PurchaseOrder, SalesOrder
from backend.app.models.payment import PaymentDirection
from backend.app.models.payment_method import PaymentMethod
from backend.app.models.supplier import Supplier
from backend.app.models.supplier_invoice import SupplierInvoice
from backend.app.models.user import User
from backend.app.schemas.payment import PaymentCreate


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@dataclass
class ReferenceData:
    user_id: int
    eur_id: int
    usd_id: int
    cash_method_id: int
    transfer_method_id: int
    retired_method_id: int
    customer_id: int
    supplier_id: int
    customer_invoice_id: int
    supplier_invoice_id: int
    sales_order_id: int
    purchase_order_id: int
    bank_account_id: int
    cash_register_id: int
    open_session_id: int
    closed_session_id: int


@pytest.fixture
def ref(db) -> ReferenceData:
    user = User(email="clerk@bizledger.io", hashed_password="x", is_active=True)
    eur = Currency(code="EUR", name="Euro", symbol="€")
    usd = Currency(code="USD", name="US Dollar", symbol="$")
    cash = PaymentMethod(name="Cash", type="cash")
    transfer = PaymentMethod(name="Bank transfer", type="bank_transfer")
    retired = PaymentMethod(name="Cheque", type="cheque", is_active=False)
    customer = Customer(first_name="Ada", last_name="Lovelace", email="ada@customer.io")
    supplier = Supplier(name="Paper Mill Ltd", email="billing@papermill.io")
    db.add_all([user, eur, usd, cash, transfer, retired, customer, supplier])
    db.flush()

    customer_invoice = CustomerInvoice(
        invoice_number="CI-0001",
        invoice_date=date(2030, 1, 1),
        customer_id=customer.id,
        currency_id=eur.id,
        total_amount=Decimal("100"),
        amount_paid=Decimal("0"),
        amount_remaining=Decimal("100"),
        status="unpaid",
    )
    supplier_invoice = SupplierInvoice(
        invoice_number="SI-0001",
        invoice_date=date(2030, 1, 1),
        supplier_id=supplier.id,
        currency_id=eur.id,
        total_amount=Decimal("200"),
        amount_paid=Decimal("0"),
        amount_remaining=Decimal("200"),
        status="unpaid",
    )
    sales_order = SalesOrder(order_number="SO-0001", customer_id=customer.id, total_amount=Decimal("75"))
    purchase_order = PurchaseOrder(order_number="PO-0001", supplier_id=supplier.id, total_amount=Decimal("90"))
    bank_account = BankAccount(
        account_name="Operating",
        bank_name="First Bank",
        currency_id=eur.id,
        initial_balance=Decimal("500"),
        current_balance=Decimal("500"),
    )
    register = CashRegister(name="Front desk", currency_id=eur.id, current_balance=Decimal("50"))
    db.add_all([customer_invoice, supplier_invoice, sales_order, purchase_order, bank_account, register])
    db.flush()

    open_session = CashRegisterSession(
        cash_register_id=register.id,
        opened_by_user_id=user.id,
        opening_balance=Decimal("50"),
        status=CashRegisterSessionStatus.OPEN.value,
    )
    closed_session = CashRegisterSession(
        cash_register_id=register.id,
        opened_by_user_id=user.id,
        opening_balance=Decimal("0"),
        status=CashRegisterSessionStatus.CLOSED.value,
    )
    db.add_all([open_session, closed_session])
    db.commit()

    return ReferenceData(
        user_id=user.id,
        eur_id=eur.id,
        usd_id=usd.id,
        cash_method_id=cash.id,
        transfer_method_id=transfer.id,
        retired_method_id=retired.id,
        customer_id=customer.id,
        supplier_id=supplier.id,
        customer_invoice_id=customer_invoice.id,
        supplier_invoice_id=supplier_invoice.id,
        sales_order_id=sales_order.id,
        purchase_order_id=purchase_order.id,
        bank_account_id=bank_account.id,
        cash_register_id=register.id,
        open_session_id=open_session.id,
        closed_session_id=closed_session.id,
    )


@pytest.fixture
def make_payload(ref):
    """Build a PaymentCreate defaulting to an outbound bank transfer of 120 EUR."""

    def _make(**overrides) -> PaymentCreate:
        data = {
            "payment_date": date(2030, 1, 15),
            "amount": Decimal("120"),
            "currency_id": ref.eur_id,
            "payment_method_id": ref.transfer_method_id,
            "direction": PaymentDirection.OUTBOUND,
            "bank_account_id": ref.bank_account_id,
        }
        data.update(overrides)
        return PaymentCreate(**data)

    return _make
