"""
Router pour la facturation : frais et paiements.
Toutes les routes sont fermées si l'école a désactivé les paiements.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import STAFF
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.fee import FeeCreate, FeeResponse, FeeUpdate, PaymentCreate, PaymentResponse
from app.services import fee_service
from app.services.fee_service import fees

router = APIRouter(prefix="/api/fees", tags=["Facturation"])

staff_access = scoped(*STAFF)


def payments_access(tenant: Tenant = Depends(staff_access), db: Session = Depends(get_db)) -> Tenant:
    fee_service.ensure_payments_enabled(db, tenant)
    return tenant


@router.get("", response_model=Page[FeeResponse], summary="Lister les frais")
def list_fees(
    student_id: Optional[int] = Query(None, alias="studentId"),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(payments_access),
    db: Session = Depends(get_db),
):
    return fees.paginate(db, tenant, params, student_id=student_id)


@router.get("/{fee_id}", response_model=FeeResponse, summary="Détail d'un frais")
def get_fee(fee_id: int, tenant: Tenant = Depends(payments_access), db: Session = Depends(get_db)):
    fee = fees.get(db, tenant, fee_id)
    if fee is None:
        raise NotFound("Fee not found")
    return fee


@router.post("", response_model=FeeResponse, status_code=201, summary="Créer un frais")
def create_fee(data: FeeCreate, tenant: Tenant = Depends(payments_access), db: Session = Depends(get_db)):
    """Le numéro de facture est unique au sein de l'école."""
    return fees.create(db, tenant, data)


@router.put("/{fee_id}", response_model=FeeResponse, summary="Modifier un frais")
@router.patch("/{fee_id}", response_model=FeeResponse, summary="Modifier partiellement un frais")
def update_fee(
    fee_id: int,
    data: FeeUpdate,
    tenant: Tenant = Depends(payments_access),
    db: Session = Depends(get_db),
):
    fee = fees.update(db, tenant, fee_id, data)
    if fee is None:
        raise NotFound("Fee not found")
    return fee


@router.delete("/{fee_id}", summary="Supprimer un frais")
def delete_fee(fee_id: int, tenant: Tenant = Depends(payments_access), db: Session = Depends(get_db)):
    """Refusé si des paiements ont déjà été enregistrés."""
    if not fees.delete(db, tenant, fee_id):
        raise NotFound("Fee not found")
    return {"message": "Fee deleted"}


# --- Paiements ---

@router.get("/{fee_id}/payments", response_model=List[PaymentResponse], summary="Paiements d'un frais")
def list_payments(fee_id: int, tenant: Tenant = Depends(payments_access), db: Session = Depends(get_db)):
    payments = fee_service.list_payments(db, tenant, fee_id)
    if payments is None:
        raise NotFound("Fee not found")
    return payments


@router.post("/{fee_id}/payments", response_model=PaymentResponse, status_code=201, summary="Enregistrer un paiement")
def record_payment(
    fee_id: int,
    data: PaymentCreate,
    tenant: Tenant = Depends(payments_access),
    db: Session = Depends(get_db),
):
    payment = fee_service.record_payment(db, tenant, fee_id, data)
    if payment is None:
        raise NotFound("Fee not found")
    return payment
