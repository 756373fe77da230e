"""
Router pour les évaluations.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import EDUCATORS
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.grade import GradeCreate, GradeResponse, GradeUpdate
from app.services.grade_service import grades

router = APIRouter(prefix="/api/grades", tags=["Évaluations"])

educator_access = scoped(*EDUCATORS)


@router.get("", response_model=Page[GradeResponse], summary="Lister les évaluations")
def list_grades(
    student_id: Optional[int] = Query(None, alias="studentId"),
    course_id: Optional[int] = Query(None, alias="courseId"),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(educator_access),
    db: Session = Depends(get_db),
):
    return grades.paginate(db, tenant, params, student_id=student_id, course_id=course_id)


@router.get("/{grade_id}", response_model=GradeResponse, summary="Détail d'une évaluation")
def get_grade(grade_id: int, tenant: Tenant = Depends(educator_access), db: Session = Depends(get_db)):
    grade = grades.get(db, tenant, grade_id)
    if grade is None:
        raise NotFound("Grade not found")
    return grade


@router.post("", response_model=GradeResponse, status_code=201, summary="Enregistrer une évaluation")
def create_grade(data: GradeCreate, tenant: Tenant = Depends(educator_access), db: Session = Depends(get_db)):
    return grades.create(db, tenant, data)


@router.put("/{grade_id}", response_model=GradeResponse, summary="Modifier une évaluation")
@router.patch("/{grade_id}", response_model=GradeResponse, summary="Modifier partiellement une évaluation")
def update_grade(
    grade_id: int,
    data: GradeUpdate,
    tenant: Tenant = Depends(educator_access),
    db: Session = Depends(get_db),
):
    grade = grades.update(db, tenant, grade_id, data)
    if grade is None:
        raise NotFound("Grade not found")
    return grade


@router.delete("/{grade_id}", summary="Supprimer une évaluation")
def delete_grade(grade_id: int, tenant: Tenant = Depends(educator_access), db: Session = Depends(get_db)):
    if not grades.delete(db, tenant, grade_id):
        raise NotFound("Grade not found")
    return {"message": "Grade deleted"}
