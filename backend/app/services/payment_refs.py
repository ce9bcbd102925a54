"""Structured references carried by a validated payment.

A payment touches exactly one financial account, at most one counterparty and
at most one settled document. Each of those is a small frozen dataclass so the
"which one is set" question is answered by the type rather than by checking
several nullable ids.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from backend.app.models.payment import Payment, PaymentDirection


@dataclass(frozen=True)
class BankAccountRef:
    id: int
    kind = "bank_account"


@dataclass(frozen=True)
class CashRegisterSessionRef:
    id: int
    kind = "cash_register_session"


AccountRef = Union[BankAccountRef, CashRegisterSessionRef]


@dataclass(frozen=True)
class CustomerRef:
    id: int
    kind = "customer"


@dataclass(frozen=True)
class SupplierRef:
    id: int
    kind = "supplier"


CounterpartyRef = Union[CustomerRef, SupplierRef]


@dataclass(frozen=True)
class CustomerInvoiceRef:
    id: int
    kind = "customer_invoice"


@dataclass(frozen=True)
class SupplierInvoiceRef:
    id: int
    kind = "supplier_invoice"


@dataclass(frozen=True)
class SalesOrderRef:
    id: int
    kind = "sales_order"


@dataclass(frozen=True)
class PurchaseOrderRef:
    id: int
    kind = "purchase_order"


DocumentRef = Union[CustomerInvoiceRef, SupplierInvoiceRef, SalesOrderRef, PurchaseOrderRef]


@dataclass(frozen=True)
class PaymentCandidate:
    """A payment that passed validation and is ready to be persisted."""

    payment_date: date
    amount: Decimal
    currency_id: int
    payment_method_id: int
    direction: PaymentDirection
    account: AccountRef
    counterparty: Optional[CounterpartyRef] = None
    document: Optional[DocumentRef] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None

    @property
    def account_delta(self) -> Decimal:
        return self.amount * self.direction.account_sign

    def column_values(self) -> dict:
        """Flatten the references back onto the payment table's columns."""
        values = {
            "payment_date": self.payment_date,
            "amount": self.amount,
            "currency_id": self.currency_id,
            "payment_method_id": self.payment_method_id,
            "direction": self.direction.value,
            "reference_number": self.reference_number,
            "notes": self.notes,
            "customer_id": None,
            "supplier_id": None,
            "customer_invoice_id": None,
            "supplier_invoice_id": None,
            "sales_order_id": None,
            "purchase_order_id": None,
            "bank_account_id": None,
            "cash_register_session_id": None,
        }
        values[f"{self.account.kind}_id"] = self.account.id
        if self.counterparty is not None:
            values[f"{self.counterparty.kind}_id"] = self.counterparty.id
        if self.document is not None:
            values[f"{self.document.kind}_id"] = self.document.id
        return values


def account_ref_of(payment: Payment) -> Optional[AccountRef]:
    if payment.bank_account_id is not None:
        return BankAccountRef(payment.bank_account_id)
    if payment.cash_register_session_id is not None:
        return CashRegisterSessionRef(payment.cash_register_session_id)
    return None


def document_ref_of(payment: Payment) -> Optional[DocumentRef]:
    if payment.customer_invoice_id is not None:
        return CustomerInvoiceRef(payment.customer_invoice_id)
    if payment.supplier_invoice_id is not None:
        return SupplierInvoiceRef(payment.supplier_invoice_id)
    if payment.sales_order_id is not None:
        return SalesOrderRef(payment.sales_order_id)
    if payment.purchase_order_id is not None:
        return PurchaseOrderRef(payment.purchase_order_id)
    return None
