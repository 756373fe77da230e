"""
Schémas Pydantic pour les frais (factures) et paiements.
"""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import field_validator

from app.schemas.common import (
    ApiModel,
    DateField,
    IntField,
    MoneyField,
    OptionalDate,
    OptionalInt,
    OptionalMoney,
    OptionalStr,
    not_blank,
)

FeeStatus = Literal["open", "paid", "overdue", "cancelled"]
PaymentMethod = Literal["cash", "bank_transfer", "card", "ideal"]


def _positive(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is not None and v <= 0:
        raise ValueError("Amount must be greater than zero")
    return v


class FeeCreate(ApiModel):
    student_id: IntField
    invoice_number: str
    description: OptionalStr = None
    amount: MoneyField
    due_date: DateField
    status: FeeStatus = "open"
    school_id: OptionalInt = None

    @field_validator("invoice_number")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("amount")
    @classmethod
    def positive(cls, v: Decimal) -> Decimal:
        return _positive(v)


class FeeUpdate(ApiModel):
    invoice_number: Optional[str] = None
    description: OptionalStr = None
    amount: OptionalMoney = None
    due_date: OptionalDate = None
    status: Optional[FeeStatus] = None

    @field_validator("invoice_number")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)

    @field_validator("amount")
    @classmethod
    def positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _positive(v)


class FeeResponse(ApiModel):
    id: int
    school_id: int
    student_id: int
    invoice_number: str
    description: Optional[str]
    amount: Decimal
    due_date: dt.date
    status: str
    created_at: Optional[dt.datetime]


class PaymentCreate(ApiModel):
    amount: MoneyField
    payment_date: OptionalDate = None
    method: PaymentMethod = "bank_transfer"
    reference: OptionalStr = None

    @field_validator("amount")
    @classmethod
    def positive(cls, v: Decimal) -> Decimal:
        return _positive(v)


class PaymentResponse(ApiModel):
    id: int
    school_id: int
    fee_id: int
    amount: Decimal
    payment_date: dt.date
    method: str
    reference: Optional[str]
