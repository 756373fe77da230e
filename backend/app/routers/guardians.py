"""
Router pour les tuteurs légaux.
GET/POST/DELETE /api/guardians/{id}/students gèrent les liens élève ↔ tuteur.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import EDUCATORS, STAFF
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.guardian import (
    GuardianCreate,
    GuardianResponse,
    GuardianUpdate,
    StudentGuardianCreate,
    StudentGuardianResponse,
)
from app.services import guardian_service
from app.services.guardian_service import guardians

router = APIRouter(prefix="/api/guardians", tags=["Tuteurs"])

read_access = scoped(*EDUCATORS)
write_access = scoped(*STAFF)


@router.get("", response_model=Page[GuardianResponse], summary="Lister les tuteurs")
def list_guardians(
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    return guardians.paginate(db, tenant, params)


@router.get("/{guardian_id}", response_model=GuardianResponse, summary="Détail d'un tuteur")
def get_guardian(guardian_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    guardian = guardians.get(db, tenant, guardian_id)
    if guardian is None:
        raise NotFound("Guardian not found")
    return guardian


@router.post("", response_model=GuardianResponse, status_code=201, summary="Créer un tuteur")
def create_guardian(data: GuardianCreate, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    return guardians.create(db, tenant, data)


@router.put("/{guardian_id}", response_model=GuardianResponse, summary="Modifier un tuteur")
@router.patch("/{guardian_id}", response_model=GuardianResponse, summary="Modifier partiellement un tuteur")
def update_guardian(
    guardian_id: int,
    data: GuardianUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    guardian = guardians.update(db, tenant, guardian_id, data)
    if guardian is None:
        raise NotFound("Guardian not found")
    return guardian


@router.delete("/{guardian_id}", summary="Supprimer un tuteur")
def delete_guardian(guardian_id: int, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    if not guardians.delete(db, tenant, guardian_id):
        raise NotFound("Guardian not found")
    return {"message": "Guardian deleted"}


# --- Liens élève ↔ tuteur ---

@router.get("/{guardian_id}/students", response_model=List[StudentGuardianResponse], summary="Élèves d'un tuteur")
def list_guardian_students(guardian_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    links = guardian_service.get_links(db, tenant, guardian_id)
    if links is None:
        raise NotFound("Guardian not found")
    return links


@router.post(
    "/{guardian_id}/students",
    response_model=StudentGuardianResponse,
    status_code=201,
    summary="Lier un élève à un tuteur",
)
def link_student(
    guardian_id: int,
    data: StudentGuardianCreate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    link = guardian_service.link_student(db, tenant, guardian_id, data)
    if link is None:
        raise NotFound("Guardian not found")
    return link


@router.delete("/{guardian_id}/students/{link_id}", summary="Supprimer un lien élève ↔ tuteur")
def unlink_student(
    guardian_id: int,
    link_id: int,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    if not guardian_service.unlink_student(db, tenant, guardian_id, link_id):
        raise NotFound("Guardian link not found")
    return {"message": "Guardian link deleted"}
