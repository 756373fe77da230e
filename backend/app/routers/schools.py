"""
Router pour les écoles (tenants). Réservé au superadmin.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import authorize
from app.auth.roles import Role
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.school import SchoolCreate, SchoolResponse, SchoolUpdate
from app.services import school_service

router = APIRouter(
    prefix="/api/schools",
    tags=["Écoles"],
    dependencies=[Depends(authorize(Role.SUPERADMIN))],
)


@router.get("", response_model=Page[SchoolResponse], summary="Lister les écoles")
def list_schools(params: ListParams = Depends(list_params), db: Session = Depends(get_db)):
    return school_service.list_schools(db, params)


@router.get("/{school_id}", response_model=SchoolResponse, summary="Détail d'une école")
def get_school(school_id: int, db: Session = Depends(get_db)):
    school = school_service.get_school(db, school_id)
    if school is None:
        raise NotFound("School not found")
    return school


@router.post("", response_model=SchoolResponse, status_code=201, summary="Créer une école")
def create_school(data: SchoolCreate, db: Session = Depends(get_db)):
    return school_service.create_school(db, data)


@router.put("/{school_id}", response_model=SchoolResponse, summary="Modifier une école")
@router.patch("/{school_id}", response_model=SchoolResponse, summary="Modifier partiellement une école")
def update_school(school_id: int, data: SchoolUpdate, db: Session = Depends(get_db)):
    """Permet notamment de basculer les drapeaux allowDeletion et enablePayments."""
    school = school_service.update_school(db, school_id, data)
    if school is None:
        raise NotFound("School not found")
    return school


@router.delete("/{school_id}", summary="Supprimer une école")
def delete_school(school_id: int, db: Session = Depends(get_db)):
    if not school_service.delete_school(db, school_id):
        raise NotFound("School not found")
    return {"message": "School deleted"}
