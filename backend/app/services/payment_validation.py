"""Reference validation for payments about to be recorded.

Validation never writes. Structural rules (amount sign and scale, a single
account, a single counterparty and document, direction/family consistency) run
first and short-circuit before any query; reference rules then resolve every
id the payment carries against the store.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.core.errors import (
    ConflictError,
    NotFoundError,
    PaymentValidationError,
    Violation,
    ViolationKind,
)
from backend.app.crud.crud_bank_account import bank_account_crud
from backend.app.crud.crud_cash_register import cash_register_crud
from backend.app.crud.crud_currency import currency_crud
from backend.app.crud.crud_invoice import customer_invoice_crud, supplier_invoice_crud
from backend.app.crud.crud_order import purchase_order_crud, sales_order_crud
from backend.app.crud.crud_party import customer_crud, supplier_crud
from backend.app.crud.crud_payment_method import payment_method_crud
from backend.app.crud.crud_user import user_crud
from backend.app.models.invoice import TERMINAL_INVOICE_STATUSES
from backend.app.models.payment import AMOUNT_PRECISION, AMOUNT_SCALE, PaymentDirection
from backend.app.schemas.payment import PaymentCreate
from backend.app.services.payment_refs import (
    AccountRef,
    BankAccountRef,
    CashRegisterSessionRef,
    CounterpartyRef,
    CustomerInvoiceRef,
    CustomerRef,
    DocumentRef,
    PaymentCandidate,
    PurchaseOrderRef,
    SalesOrderRef,
    SupplierInvoiceRef,
    SupplierRef,
)

# Fields each direction is allowed to reference; the other family is rejected.
CUSTOMER_SIDE_FIELDS = ("customer_id", "customer_invoice_id", "sales_order_id")
SUPPLIER_SIDE_FIELDS = ("supplier_id", "supplier_invoice_id", "purchase_order_id")
DOCUMENT_FIELDS = ("customer_invoice_id", "supplier_invoice_id", "sales_order_id", "purchase_order_id")
MAX_AMOUNT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)
AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)


@dataclass
class ValidationResult:
    violations: List[Violation] = field(default_factory=list)
    candidate: Optional[PaymentCandidate] = None

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def add(self, field_name: str, message: str, kind: ViolationKind = ViolationKind.INVALID) -> None:
        self.violations.append(Violation(field=field_name, message=message, kind=kind))

    def raise_for_violations(self) -> None:
        """Raise one error carrying every violation, typed by the most severe kind."""
        if self.is_valid:
            return
        kinds = {violation.kind for violation in self.violations}
        summary = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        if ViolationKind.INVALID in kinds:
            raise PaymentValidationError(f"Invalid payment data. {summary}", self.violations)
        if ViolationKind.NOT_FOUND in kinds:
            raise NotFoundError(f"Referenced entity not found. {summary}", self.violations)
        raise ConflictError(f"Payment rejected. {summary}", self.violations)


class ReferenceValidator:
    """Checks a payment payload against structural rules and the store."""

    def __init__(
        self,
        *,
        users=user_crud,
        currencies=currency_crud,
        payment_methods=payment_method_crud,
        customers=customer_crud,
        suppliers=supplier_crud,
        customer_invoices=customer_invoice_crud,
        supplier_invoices=supplier_invoice_crud,
        sales_orders=sales_order_crud,
        purchase_orders=purchase_order_crud,
        bank_accounts=bank_account_crud,
        cash_registers=cash_register_crud,
    ):
        self.users = users
        self.currencies = currencies
        self.payment_methods = payment_methods
        self.customers = customers
        self.suppliers = suppliers
        self.customer_invoices = customer_invoices
        self.supplier_invoices = supplier_invoices
        self.sales_orders = sales_orders
        self.purchase_orders = purchase_orders
        self.bank_accounts = bank_accounts
        self.cash_registers = cash_registers

    def validate(self, db: Session, payload: PaymentCreate, recording_user_id: int) -> ValidationResult:
        result = self.check_structure(payload)
        if not result.is_valid:
            return result

        self._check_references(db, payload, recording_user_id, result)
        if result.is_valid:
            result.candidate = self._build_candidate(payload)
        return result

    def check_structure(self, payload: PaymentCreate) -> ValidationResult:
        result = ValidationResult()

        amount = Decimal(payload.amount) if payload.amount is not None else None
        if amount is None or amount <= 0:
            result.add("amount", "Payment amount must be positive.")
        elif amount >= MAX_AMOUNT:
            result.add("amount", f"Payment amount must be below {MAX_AMOUNT}.")
        elif amount != amount.quantize(AMOUNT_QUANTUM):
            result.add("amount", f"Payment amount allows at most {AMOUNT_SCALE} decimal places.")

        if payload.bank_account_id is None and payload.cash_register_session_id is None:
            result.add(
                "bank_account_id",
                "Payment must be associated with either a bank account or a cash register session.",
            )
        elif payload.bank_account_id is not None and payload.cash_register_session_id is not None:
            result.add(
                "bank_account_id",
                "Payment cannot be associated with both a bank account and a cash register session.",
            )

        if payload.customer_id is not None and payload.supplier_id is not None:
            result.add("supplier_id", "Payment cannot reference both a customer and a supplier.")

        documents = [name for name in DOCUMENT_FIELDS if getattr(payload, name) is not None]
        if len(documents) > 1:
            result.add(documents[1], f"Payment can settle at most one document; got {', '.join(documents)}.")

        if payload.direction == PaymentDirection.INBOUND:
            forbidden = SUPPLIER_SIDE_FIELDS
        else:
            forbidden = CUSTOMER_SIDE_FIELDS
        for name in forbidden:
            if getattr(payload, name) is not None:
                result.add(name, f"Not allowed on an {payload.direction.value} payment.")

        return result

    def _check_references(
        self, db: Session, payload: PaymentCreate, recording_user_id: int, result: ValidationResult
    ) -> None:
        if self.users.find_active_by_id(db, recording_user_id) is None:
            result.add("recorded_by_user_id", f"User with ID {recording_user_id} not found.", ViolationKind.NOT_FOUND)

        if self.currencies.find_active_by_id(db, payload.currency_id) is None:
            result.add(
                "currency_id", f"Active currency with ID {payload.currency_id} not found.", ViolationKind.NOT_FOUND
            )

        if self.payment_methods.find_active_by_id(db, payload.payment_method_id) is None:
            result.add(
                "payment_method_id",
                f"Active payment method with ID {payload.payment_method_id} not found.",
                ViolationKind.NOT_FOUND,
            )

        if payload.customer_id is not None and self.customers.find_by_id(db, payload.customer_id) is None:
            result.add("customer_id", f"Customer with ID {payload.customer_id} not found.", ViolationKind.NOT_FOUND)
        if payload.supplier_id is not None and self.suppliers.find_by_id(db, payload.supplier_id) is None:
            result.add("supplier_id", f"Supplier with ID {payload.supplier_id} not found.", ViolationKind.NOT_FOUND)

        if payload.customer_invoice_id is not None:
            self._check_invoice(
                db, self.customer_invoices, "customer_invoice_id", payload.customer_invoice_id, payload, result
            )
        if payload.supplier_invoice_id is not None:
            self._check_invoice(
                db, self.supplier_invoices, "supplier_invoice_id", payload.supplier_invoice_id, payload, result
            )

        if payload.sales_order_id is not None and self.sales_orders.find_by_id(db, payload.sales_order_id) is None:
            result.add(
                "sales_order_id", f"Sales Order ID {payload.sales_order_id} not found.", ViolationKind.NOT_FOUND
            )
        if (
            payload.purchase_order_id is not None
            and self.purchase_orders.find_by_id(db, payload.purchase_order_id) is None
        ):
            result.add(
                "purchase_order_id",
                f"Purchase Order ID {payload.purchase_order_id} not found.",
                ViolationKind.NOT_FOUND,
            )

        if payload.bank_account_id is not None and self.bank_accounts.find_by_id(db, payload.bank_account_id) is None:
            result.add(
                "bank_account_id", f"Bank Account ID {payload.bank_account_id} not found.", ViolationKind.NOT_FOUND
            )
        if payload.cash_register_session_id is not None:
            self._check_cash_session(db, payload, result)

    def _check_invoice(self, db, invoices, field_name, invoice_id, payload, result) -> None:
        invoice = invoices.find_by_id(db, invoice_id)
        if invoice is None:
            result.add(field_name, f"Invoice ID {invoice_id} not found.", ViolationKind.NOT_FOUND)
            return
        if invoice.status in TERMINAL_INVOICE_STATUSES:
            result.add(
                field_name,
                f"Invoice {invoice.invoice_number} is already {invoice.status} and cannot receive further payments.",
                ViolationKind.CONFLICT,
            )
        if invoice.currency_id != payload.currency_id:
            result.add(
                "currency_id",
                f"Payment currency (ID {payload.currency_id}) does not match invoice currency (ID {invoice.currency_id}).",
            )

    def _check_cash_session(self, db, payload: PaymentCreate, result: ValidationResult) -> None:
        session_id = payload.cash_register_session_id
        session = self.cash_registers.find_session_by_id(db, session_id)
        if session is None:
            result.add(
                "cash_register_session_id",
                f"Cash Register Session ID {session_id} not found.",
                ViolationKind.NOT_FOUND,
            )
            return
        if not session.is_open:
            result.add(
                "cash_register_session_id",
                f"Cash Register Session ID {session_id} is not open.",
                ViolationKind.CONFLICT,
            )
        register_currency_id = session.cash_register.currency_id if session.cash_register else None
        if payload.direction == PaymentDirection.INBOUND and register_currency_id != payload.currency_id:
            result.add(
                "currency_id",
                f"Payment currency (ID {payload.currency_id}) must match cash register currency "
                f"(ID {register_currency_id}) for inbound cash payments.",
            )

    def _build_candidate(self, payload: PaymentCreate) -> PaymentCandidate:
        account: AccountRef
        if payload.bank_account_id is not None:
            account = BankAccountRef(payload.bank_account_id)
        else:
            account = CashRegisterSessionRef(payload.cash_register_session_id)

        counterparty: Optional[CounterpartyRef] = None
        if payload.customer_id is not None:
            counterparty = CustomerRef(payload.customer_id)
        elif payload.supplier_id is not None:
            counterparty = SupplierRef(payload.supplier_id)

        document: Optional[DocumentRef] = None
        if payload.customer_invoice_id is not None:
            document = CustomerInvoiceRef(payload.customer_invoice_id)
        elif payload.supplier_invoice_id is not None:
            document = SupplierInvoiceRef(payload.supplier_invoice_id)
        elif payload.sales_order_id is not None:
            document = SalesOrderRef(payload.sales_order_id)
        elif payload.purchase_order_id is not None:
            document = PurchaseOrderRef(payload.purchase_order_id)

        return PaymentCandidate(
            payment_date=payload.payment_date,
            amount=Decimal(payload.amount),
            currency_id=payload.currency_id,
            payment_method_id=payload.payment_method_id,
            direction=PaymentDirection(payload.direction),
            account=account,
            counterparty=counterparty,
            document=document,
            reference_number=payload.reference_number,
            notes=payload.notes,
        )
