"""
Router pour le personnel enseignant.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import EDUCATORS, STAFF
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.teacher import TeacherCreate, TeacherResponse, TeacherUpdate
from app.services.teacher_service import teachers

router = APIRouter(prefix="/api/teachers", tags=["Enseignants"])

read_access = scoped(*EDUCATORS)
write_access = scoped(*STAFF)


@router.get("", response_model=Page[TeacherResponse], summary="Lister les enseignants")
def list_teachers(
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    return teachers.paginate(db, tenant, params)


@router.get("/{teacher_id}", response_model=TeacherResponse, summary="Détail d'un enseignant")
def get_teacher(teacher_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    teacher = teachers.get(db, tenant, teacher_id)
    if teacher is None:
        raise NotFound("Teacher not found")
    return teacher


@router.post("", response_model=TeacherResponse, status_code=201, summary="Créer un enseignant")
def create_teacher(data: TeacherCreate, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    return teachers.create(db, tenant, data)


@router.put("/{teacher_id}", response_model=TeacherResponse, summary="Modifier un enseignant")
@router.patch("/{teacher_id}", response_model=TeacherResponse, summary="Modifier partiellement un enseignant")
def update_teacher(
    teacher_id: int,
    data: TeacherUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    teacher = teachers.update(db, tenant, teacher_id, data)
    if teacher is None:
        raise NotFound("Teacher not found")
    return teacher


@router.delete("/{teacher_id}", summary="Supprimer un enseignant")
def delete_teacher(teacher_id: int, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    """Refusé si l'enseignant est encore titulaire d'un cours ou d'un groupe."""
    if not teachers.delete(db, tenant, teacher_id):
        raise NotFound("Teacher not found")
    return {"message": "Teacher deleted"}
