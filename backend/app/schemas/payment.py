"""Payment schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.payment import AMOUNT_PRECISION, AMOUNT_SCALE, PaymentDirection


class PaymentCreate(BaseModel):
    payment_date: date
    amount: Decimal = Field(gt=0, max_digits=AMOUNT_PRECISION, decimal_places=AMOUNT_SCALE)
    currency_id: int = Field(gt=0)
    payment_method_id: int = Field(gt=0)
    direction: PaymentDirection

    customer_id: Optional[int] = Field(default=None, gt=0)
    supplier_id: Optional[int] = Field(default=None, gt=0)

    customer_invoice_id: Optional[int] = Field(default=None, gt=0)
    supplier_invoice_id: Optional[int] = Field(default=None, gt=0)
    sales_order_id: Optional[int] = Field(default=None, gt=0)
    purchase_order_id: Optional[int] = Field(default=None, gt=0)

    bank_account_id: Optional[int] = Field(default=None, gt=0)
    cash_register_session_id: Optional[int] = Field(default=None, gt=0)

    reference_number: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=1000)


class CurrencySummary(BaseModel):
    id: int
    code: str
    name: str
    symbol: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PaymentMethodSummary(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CounterpartySummary(BaseModel):
    kind: str
    id: int
    name: str
    email: Optional[str] = None


class DocumentSummary(BaseModel):
    kind: str
    id: int
    number: str
    status: Optional[str] = None
    total_amount: Optional[Decimal] = None
    amount_paid: Optional[Decimal] = None


class AccountSummary(BaseModel):
    kind: str
    id: int
    name: str
    balance: Decimal
    status: Optional[str] = None


class RecordedBySummary(BaseModel):
    id: int
    email: str

    model_config = ConfigDict(from_attributes=True)


class PaymentRead(BaseModel):
    id: int
    payment_date: date
    amount: Decimal
    direction: PaymentDirection
    currency: CurrencySummary
    payment_method: PaymentMethodSummary
    counterparty: Optional[CounterpartySummary] = None
    document: Optional[DocumentSummary] = None
    account: AccountSummary
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    recorded_by: RecordedBySummary
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class PaymentPage(BaseModel):
    payments: List[PaymentRead]
    total: int
