"""
Router pour les groupes d'élèves (classes).
/api/student-groups/{id}/students gère les inscriptions dans le groupe.
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
from app.schemas.school_class import (
    GroupEnrollmentCreate,
    GroupEnrollmentResponse,
    StudentGroupCreate,
    StudentGroupResponse,
    StudentGroupUpdate,
)
from app.services import student_group_service
from app.services.student_group_service import groups

router = APIRouter(prefix="/api/student-groups", tags=["Groupes"])

read_access = scoped(*EDUCATORS)
write_access = scoped(*STAFF)


@router.get("", response_model=Page[StudentGroupResponse], summary="Lister les groupes")
def list_groups(
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    """Retourne les groupes triés par nom, avec leur nombre d'élèves."""
    return student_group_service.list_groups(db, tenant, params)


@router.get("/{group_id}", response_model=StudentGroupResponse, summary="Détail d'un groupe")
def get_group(group_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    group = groups.get(db, tenant, group_id)
    if group is None:
        raise NotFound("Student group not found")
    return student_group_service.to_response(db, group)


@router.post("", response_model=StudentGroupResponse, status_code=201, summary="Créer un groupe")
def create_group(data: StudentGroupCreate, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    group = groups.create(db, tenant, data)
    return student_group_service.to_response(db, group)


@router.put("/{group_id}", response_model=StudentGroupResponse, summary="Modifier un groupe")
@router.patch("/{group_id}", response_model=StudentGroupResponse, summary="Modifier partiellement un groupe")
def update_group(
    group_id: int,
    data: StudentGroupUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    group = groups.update(db, tenant, group_id, data)
    if group is None:
        raise NotFound("Student group not found")
    return student_group_service.to_response(db, group)


@router.delete("/{group_id}", summary="Supprimer un groupe")
def delete_group(group_id: int, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    """Refusé tant que des élèves sont inscrits dans le groupe."""
    if not groups.delete(db, tenant, group_id):
        raise NotFound("Student group not found")
    return {"message": "Student group deleted"}


# --- Inscriptions dans le groupe ---

@router.get("/{group_id}/students", response_model=List[GroupEnrollmentResponse], summary="Élèves d'un groupe")
def list_group_students(group_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    enrollments = student_group_service.list_group_students(db, tenant, group_id)
    if enrollments is None:
        raise NotFound("Student group not found")
    return enrollments


@router.post(
    "/{group_id}/students",
    response_model=GroupEnrollmentResponse,
    status_code=201,
    summary="Inscrire un élève dans un groupe",
)
def add_group_student(
    group_id: int,
    data: GroupEnrollmentCreate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    enrollment = student_group_service.enroll_student(db, tenant, group_id, data)
    if enrollment is None:
        raise NotFound("Student group not found")
    return enrollment


@router.delete("/{group_id}/students/{student_id}", summary="Retirer un élève d'un groupe")
def remove_group_student(
    group_id: int,
    student_id: int,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    if not student_group_service.remove_student(db, tenant, group_id, student_id):
        raise NotFound("Group enrollment not found")
    return {"message": "Student removed from group"}
