"""
Service métier pour la facturation : frais et paiements.

Toute opération est refusée si l'école a désactivé les paiements
(drapeau School.enable_payments).
"""

import datetime as dt
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.auth.tenant import Tenant
from app.errors import Conflict, Forbidden
from app.models.fee import Fee, Payment
from app.models.school import School
from app.models.student import Student
from app.schemas.fee import PaymentCreate
from app.services.crud import TenantCrud

logger = logging.getLogger(__name__)

PAID = "paid"
CANCELLED = "cancelled"

fees = TenantCrud(
    Fee,
    "Fee",
    search_columns=("invoice_number", "description"),
    order_by=("-due_date",),
    unique_fields={"invoice_number": "invoice number"},
    references={"student_id": (Student, "Student")},
    dependents=((Payment, "fee_id", "payments"),),
)


def ensure_payments_enabled(db: Session, tenant: Tenant) -> None:
    """403 si l'école de l'appelant a désactivé les paiements. Le superadmin n'est pas concerné."""
    if tenant.is_global:
        return
    school = db.get(School, tenant.school_id)
    if school is not None and not school.enable_payments:
        raise Forbidden("Payments are disabled for this school")


def total_paid(db: Session, fee_id: int) -> Decimal:
    total = db.execute(
        select(func.coalesce(func.sum(Payment.amount), 0)).where(Payment.fee_id == fee_id)
    ).scalar()
    return Decimal(str(total))


def list_payments(db: Session, tenant: Tenant, fee_id: int) -> Optional[list[Payment]]:
    """Paiements d'une facture, ou None si la facture est introuvable."""
    fee = fees.get(db, tenant, fee_id)
    if fee is None:
        return None
    return list(db.execute(
        select(Payment).where(Payment.fee_id == fee.id).order_by(Payment.payment_date, Payment.id)
    ).scalars().all())


def record_payment(db: Session, tenant: Tenant, fee_id: int, data: PaymentCreate) -> Optional[Payment]:
    """
    Enregistre un paiement sur une facture.
    La facture passe à "paid" dès que le total payé couvre le montant.
    """
    fee = fees.get(db, tenant, fee_id)
    if fee is None:
        return None
    if fee.status == CANCELLED:
        raise Conflict("Cannot record a payment on a cancelled fee")
    if fee.status == PAID:
        raise Conflict("Fee is already paid")

    payment = Payment(
        school_id=fee.school_id,
        fee_id=fee.id,
        amount=data.amount,
        payment_date=data.payment_date or dt.date.today(),
        method=data.method,
        reference=data.reference,
    )
    db.add(payment)
    db.flush()

    if total_paid(db, fee.id) >= Decimal(str(fee.amount)):
        fee.status = PAID

    db.commit()
    db.refresh(payment)
    logger.info(
        "Paiement enregistré : facture=%s, montant=%s, statut=%s",
        fee.invoice_number, payment.amount, fee.status,
    )
    return payment
