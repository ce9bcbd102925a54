"""Recording and reversing payments.

A recorded payment moves money in three places at once: the payment row
itself, the invoice it settles (if any) and the bank account or cash register
it went through. Recording and reversal each run as one database transaction;
any failure in between rolls all of it back.
"""

import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import (
    ConflictError,
    NotFoundError,
    PaymentError,
    PaymentValidationError,
    ServerFaultError,
    Violation,
)
from backend.app.core.time import utc_now
from backend.app.crud.crud_audit_log import audit_log_crud
from backend.app.crud.crud_payment import SORTABLE_FIELDS, PaymentFilters, payment_crud
from backend.app.db.session import transaction
from backend.app.models.payment import Payment
from backend.app.schemas.payment import (
    AccountSummary,
    CounterpartySummary,
    CurrencySummary,
    DocumentSummary,
    PaymentCreate,
    PaymentMethodSummary,
    PaymentPage,
    PaymentRead,
    RecordedBySummary,
)
from backend.app.services.financial_ledger import FinancialAccountLedger
from backend.app.services.invoice_application import InvoiceApplicationEngine
from backend.app.services.payment_refs import account_ref_of, document_ref_of
from backend.app.services.payment_validation import ReferenceValidator

logger = logging.getLogger(__name__)

AUDIT_ENTITY_TYPE = "financial_transaction"


class PaymentRecorder:
    def __init__(
        self,
        *,
        validator: ReferenceValidator,
        ledger: FinancialAccountLedger,
        invoices: InvoiceApplicationEngine,
        payments=payment_crud,
        audit_log=audit_log_crud,
    ):
        self.validator = validator
        self.ledger = ledger
        self.invoices = invoices
        self.payments = payments
        self.audit_log = audit_log

    def record(self, db: Session, payload: PaymentCreate, recording_user_id: int) -> Payment:
        try:
            with transaction(db):
                result = self.validator.validate(db, payload, recording_user_id)
                result.raise_for_violations()
                candidate = result.candidate

                payment = self.payments.create(
                    db, values=candidate.column_values(), recorded_by_user_id=recording_user_id
                )
                # Invoice side always grows by the amount; direction only picks the invoice family.
                self.invoices.apply_amount(db, candidate.document, candidate.amount, recording_user_id)
                self.ledger.apply_delta(
                    db,
                    candidate.account,
                    candidate.account_delta,
                    payment=payment,
                    acting_user_id=recording_user_id,
                )
                self.audit_log.append(
                    db,
                    action="create",
                    entity_type=AUDIT_ENTITY_TYPE,
                    entity_id=payment.id,
                    details={
                        "amount": str(candidate.amount),
                        "direction": candidate.direction.value,
                        "payment_method_id": candidate.payment_method_id,
                    },
                    user_id=recording_user_id,
                )
                payment_id = payment.id
        except PaymentError as exc:
            if isinstance(exc, ServerFaultError):
                logger.exception("Recording payment failed", extra={"user_id": recording_user_id})
            raise
        except SQLAlchemyError as exc:
            logger.exception("Recording payment failed", extra={"user_id": recording_user_id})
            raise ServerFaultError("Failed to record payment.") from exc

        logger.info(
            "Payment recorded",
            extra={
                "payment_id": payment_id,
                "amount": str(candidate.amount),
                "direction": candidate.direction.value,
                "account": f"{candidate.account.kind}:{candidate.account.id}",
                "user_id": recording_user_id,
            },
        )
        return self.payments.get(db, payment_id)


class PaymentReversalEngine:
    def __init__(
        self,
        *,
        ledger: FinancialAccountLedger,
        invoices: InvoiceApplicationEngine,
        payments=payment_crud,
        audit_log=audit_log_crud,
    ):
        self.ledger = ledger
        self.invoices = invoices
        self.payments = payments
        self.audit_log = audit_log

    def reverse(self, db: Session, payment_id: int, acting_user_id: int) -> Payment:
        logger.warning("Payment reversal requested", extra={"payment_id": payment_id, "user_id": acting_user_id})
        try:
            with transaction(db):
                payment = self.payments.get_for_update(db, payment_id)
                if payment is None:
                    raise NotFoundError(f"Payment with ID {payment_id} not found.")
                if payment.is_reversed:
                    raise ConflictError(f"Payment with ID {payment_id} has already been reversed.")

                account = account_ref_of(payment)
                if account is None:
                    raise ServerFaultError(f"Payment with ID {payment_id} has no financial account.")

                amount = payment.amount
                direction = payment.payment_direction
                self.invoices.apply_amount(db, document_ref_of(payment), -amount, acting_user_id)
                self.ledger.apply_delta(
                    db,
                    account,
                    -amount * direction.account_sign,
                    payment=payment,
                    acting_user_id=acting_user_id,
                    reversal=True,
                )

                reversed_at = utc_now()
                annotation = f"[REVERSED by user {acting_user_id} on {reversed_at.isoformat()}]"
                notes = f"{payment.notes}\n{annotation}" if payment.notes else annotation
                if not self.payments.tombstone(db, payment_id=payment_id, notes=notes, deleted_at=reversed_at):
                    raise ConflictError(f"Payment with ID {payment_id} has already been reversed.")

                self.audit_log.append(
                    db,
                    action="delete",
                    entity_type=AUDIT_ENTITY_TYPE,
                    entity_id=payment_id,
                    details={
                        "amount": str(amount),
                        "direction": direction.value,
                        "payment_method_id": payment.payment_method_id,
                        "reversed_at": reversed_at.isoformat(),
                    },
                    user_id=acting_user_id,
                )
        except PaymentError as exc:
            if isinstance(exc, ServerFaultError):
                logger.exception("Reversing payment failed", extra={"payment_id": payment_id})
            raise
        except SQLAlchemyError as exc:
            logger.exception("Reversing payment failed", extra={"payment_id": payment_id})
            raise ServerFaultError("Failed to reverse payment.") from exc

        logger.info(
            "Payment reversed",
            extra={"payment_id": payment_id, "amount": str(amount), "user_id": acting_user_id},
        )
        return self.payments.get(db, payment_id)


def _counterparty_summary(payment: Payment) -> Optional[CounterpartySummary]:
    if payment.customer is not None:
        customer = payment.customer
        return CounterpartySummary(kind="customer", id=customer.id, name=customer.display_name, email=customer.email)
    if payment.supplier is not None:
        supplier = payment.supplier
        return CounterpartySummary(kind="supplier", id=supplier.id, name=supplier.name, email=supplier.email)
    return None


def _document_summary(payment: Payment) -> Optional[DocumentSummary]:
    for kind in ("customer_invoice", "supplier_invoice"):
        invoice = getattr(payment, kind)
        if invoice is not None:
            return DocumentSummary(
                kind=kind,
                id=invoice.id,
                number=invoice.invoice_number,
                status=invoice.status,
                total_amount=invoice.total_amount,
                amount_paid=invoice.amount_paid,
            )
    for kind in ("sales_order", "purchase_order"):
        order = getattr(payment, kind)
        if order is not None:
            return DocumentSummary(
                kind=kind, id=order.id, number=order.order_number, status=order.status, total_amount=order.total_amount
            )
    return None


def _account_summary(payment: Payment) -> AccountSummary:
    if payment.bank_account is not None:
        account = payment.bank_account
        return AccountSummary(
            kind="bank_account",
            id=account.id,
            name=f"{account.bank_name} - {account.account_name}",
            balance=account.current_balance,
        )
    session = payment.cash_register_session
    register = session.cash_register
    return AccountSummary(
        kind="cash_register_session",
        id=session.id,
        name=f"{register.name} (session #{session.id})",
        balance=register.current_balance,
        status=session.status,
    )


def to_payment_read(payment: Payment) -> PaymentRead:
    """Resolve a payment's relations into its outbound representation."""
    try:
        return PaymentRead(
            id=payment.id,
            payment_date=payment.payment_date,
            amount=payment.amount,
            direction=payment.payment_direction,
            currency=CurrencySummary.model_validate(payment.currency),
            payment_method=PaymentMethodSummary.model_validate(payment.payment_method),
            counterparty=_counterparty_summary(payment),
            document=_document_summary(payment),
            account=_account_summary(payment),
            reference_number=payment.reference_number,
            notes=payment.notes,
            recorded_by=RecordedBySummary.model_validate(payment.recorded_by_user),
            created_at=payment.created_at,
            updated_at=payment.updated_at,
            deleted_at=payment.deleted_at,
        )
    except (AttributeError, ValidationError) as exc:
        logger.exception("Payment could not be rendered", extra={"payment_id": payment.id})
        raise ServerFaultError(f"Payment with ID {payment.id} could not be rendered.") from exc


class PaymentService:
    """Entry point used by the HTTP layer."""

    def __init__(self, *, recorder: PaymentRecorder, reversal: PaymentReversalEngine, payments=payment_crud):
        self.recorder = recorder
        self.reversal = reversal
        self.payments = payments

    def record_payment(self, db: Session, payload: PaymentCreate, recording_user_id: int) -> PaymentRead:
        return to_payment_read(self.recorder.record(db, payload, recording_user_id))

    def reverse_payment(self, db: Session, payment_id: int, acting_user_id: int) -> PaymentRead:
        return to_payment_read(self.reversal.reverse(db, payment_id, acting_user_id))

    def get_payment(self, db: Session, payment_id: int, include_reversed: bool = True) -> PaymentRead:
        payment = self.payments.get(db, payment_id, include_reversed=include_reversed)
        if payment is None:
            raise NotFoundError(f"Payment with ID {payment_id} not found.")
        return to_payment_read(payment)

    def list_payments(
        self,
        db: Session,
        filters: PaymentFilters,
        *,
        skip: int = 0,
        limit: int = 50,
        sort_by: str = "payment_date",
        sort_order: str = "desc",
    ) -> PaymentPage:
        if sort_by not in SORTABLE_FIELDS:
            raise PaymentValidationError(
                "Invalid sort field.",
                [Violation("sort_by", f"Must be one of: {', '.join(sorted(SORTABLE_FIELDS))}.")],
            )
        if sort_order not in {"asc", "desc"}:
            raise PaymentValidationError(
                "Invalid sort order.", [Violation("sort_order", "Must be 'asc' or 'desc'.")]
            )
        items, total = self.payments.get_multi(
            db, filters=filters, skip=skip, limit=limit, sort_by=sort_by, sort_order=sort_order
        )
        return PaymentPage(payments=[to_payment_read(payment) for payment in items], total=total)


def get_payment_service() -> PaymentService:
    """Wire the payment core together."""
    ledger = FinancialAccountLedger()
    invoices = InvoiceApplicationEngine()
    return PaymentService(
        recorder=PaymentRecorder(validator=ReferenceValidator(), ledger=ledger, invoices=invoices),
        reversal=PaymentReversalEngine(ledger=ledger, invoices=invoices),
    )
