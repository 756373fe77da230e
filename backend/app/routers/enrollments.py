"""
Router pour les inscriptions élève ↔ cours.
Chaque inscription active occupe une place du cours (courses.enrolled).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import EDUCATORS, STAFF
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.enrollment import EnrollmentCreate, EnrollmentResponse, EnrollmentUpdate
from app.services.enrollment_service import enrollments

router = APIRouter(prefix="/api/enrollments", tags=["Inscriptions"])

read_access = scoped(*EDUCATORS)
write_access = scoped(*STAFF)


@router.get("", response_model=Page[EnrollmentResponse], summary="Lister les inscriptions")
def list_enrollments(
    student_id: Optional[int] = Query(None, alias="studentId"),
    course_id: Optional[int] = Query(None, alias="courseId"),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    return enrollments.paginate(db, tenant, params, student_id=student_id, course_id=course_id)


@router.get("/{enrollment_id}", response_model=EnrollmentResponse, summary="Détail d'une inscription")
def get_enrollment(enrollment_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    enrollment = enrollments.get(db, tenant, enrollment_id)
    if enrollment is None:
        raise NotFound("Enrollment not found")
    return enrollment


@router.post("", response_model=EnrollmentResponse, status_code=201, summary="Inscrire un élève à un cours")
def create_enrollment(data: EnrollmentCreate, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    """
    Refusé si l'élève est déjà inscrit à ce cours
    ou si le cours a atteint sa capacité maximale.
    """
    return enrollments.create(db, tenant, data)


@router.put("/{enrollment_id}", response_model=EnrollmentResponse, summary="Modifier une inscription")
@router.patch("/{enrollment_id}", response_model=EnrollmentResponse, summary="Modifier partiellement une inscription")
def update_enrollment(
    enrollment_id: int,
    data: EnrollmentUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    enrollment = enrollments.update(db, tenant, enrollment_id, data)
    if enrollment is None:
        raise NotFound("Enrollment not found")
    return enrollment


@router.delete("/{enrollment_id}", summary="Supprimer une inscription")
def delete_enrollment(enrollment_id: int, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    if not enrollments.delete(db, tenant, enrollment_id):
        raise NotFound("Enrollment not found")
    return {"message": "Enrollment deleted"}
