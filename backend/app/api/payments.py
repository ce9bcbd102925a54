"""Payment recording, listing and reversal endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_payment import PaymentFilters
from backend.app.db.session import get_db
from backend.app.models.payment import PaymentDirection
from backend.app.models.user import User
from backend.app.schemas.payment import PaymentCreate, PaymentPage, PaymentRead
from backend.app.services.payments import PaymentService, get_payment_service

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
def record_payment(
    payment_in: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return service.record_payment(db, payment_in, recording_user_id=current_user.id)


@router.get("/", response_model=PaymentPage)
def list_payments(
    direction: PaymentDirection | None = None,
    payment_method_id: int | None = None,
    currency_id: int | None = None,
    customer_id: int | None = None,
    supplier_id: int | None = None,
    customer_invoice_id: int | None = None,
    supplier_invoice_id: int | None = None,
    bank_account_id: int | None = None,
    cash_register_session_id: int | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
    q: str | None = None,
    include_reversed: bool = False,
    skip: int = 0,
    limit: int = 50,
    sort_by: str = "payment_date",
    sort_order: str = "desc",
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    filters = PaymentFilters(
        direction=direction.value if direction else None,
        payment_method_id=payment_method_id,
        currency_id=currency_id,
        customer_id=customer_id,
        supplier_id=supplier_id,
        customer_invoice_id=customer_invoice_id,
        supplier_invoice_id=supplier_invoice_id,
        bank_account_id=bank_account_id,
        cash_register_session_id=cash_register_session_id,
        from_date=from_date,
        to_date=to_date,
        q=q,
        include_reversed=include_reversed,
    )
    return service.list_payments(
        db,
        filters,
        skip=skip,
        limit=limit,
        sort_by=sort_by,
        sort_order=(sort_order or "desc").lower(),
    )


@router.get("/{payment_id}", response_model=PaymentRead)
def get_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return service.get_payment(db, payment_id)


@router.delete("/{payment_id}", response_model=PaymentRead)
def reverse_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return service.reverse_payment(db, payment_id, acting_user_id=current_user.id)
