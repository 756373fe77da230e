"""
Service métier pour les groupes d'élèves (classes) et leurs inscriptions.
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.auth.tenant import Tenant
from app.errors import Conflict, ValidationFailed
from app.models.program import Program
from app.models.school_class import StudentGroup, StudentGroupEnrollment
from app.models.student import Student
from app.models.teacher import Teacher
from app.schemas.common import ListParams
from app.schemas.school_class import GroupEnrollmentCreate, StudentGroupResponse
from app.services.crud import TenantCrud, ensure_deletion_allowed

logger = logging.getLogger(__name__)


class StudentGroupCrud(TenantCrud):
    def before_update(self, db: Session, obj: StudentGroup, values: dict) -> None:
        max_capacity = values.get("max_capacity")
        if max_capacity is not None and max_capacity < count_students(db, obj.id):
            raise ValidationFailed.field(
                "maxCapacity", "Capacity cannot be lower than the number of enrolled students"
            )


groups = StudentGroupCrud(
    StudentGroup,
    "Student group",
    search_columns=("name", "academic_year"),
    order_by=("name",),
    unique_fields={"name": "name"},
    references={
        "program_id": (Program, "Program"),
        "teacher_id": (Teacher, "Teacher"),
    },
    dependents=((StudentGroupEnrollment, "group_id", "group enrollments"),),
)


def count_students(db: Session, group_id: int) -> int:
    return db.execute(
        select(func.count()).where(StudentGroupEnrollment.group_id == group_id)
    ).scalar() or 0


def to_response(db: Session, group: StudentGroup) -> StudentGroupResponse:
    """Construit la réponse avec le nombre d'élèves inscrits."""
    response = StudentGroupResponse.model_validate(group)
    response.nb_students = count_students(db, group.id)
    return response


def list_groups(db: Session, tenant: Tenant, params: ListParams, **filters) -> dict:
    page = groups.paginate(db, tenant, params, **filters)
    page["items"] = [to_response(db, g) for g in page["items"]]
    return page


def list_group_students(
    db: Session, tenant: Tenant, group_id: int
) -> Optional[list[StudentGroupEnrollment]]:
    """Inscriptions du groupe, ou None si le groupe est introuvable."""
    group = groups.get(db, tenant, group_id)
    if group is None:
        return None
    return list(db.execute(
        select(StudentGroupEnrollment)
        .where(StudentGroupEnrollment.group_id == group.id)
        .order_by(StudentGroupEnrollment.id)
    ).scalars().all())


def enroll_student(
    db: Session, tenant: Tenant, group_id: int, data: GroupEnrollmentCreate
) -> Optional[StudentGroupEnrollment]:
    """
    Inscrit un élève de la même école dans le groupe.
    Refusé si l'élève y est déjà ou si le groupe est complet.
    """
    group = groups.get(db, tenant, group_id)
    if group is None:
        return None

    student = db.get(Student, data.student_id)
    if student is None or student.school_id != group.school_id:
        raise ValidationFailed.field("studentId", "Student not found")

    existing = db.execute(
        select(StudentGroupEnrollment.id).where(
            StudentGroupEnrollment.group_id == group.id,
            StudentGroupEnrollment.student_id == student.id,
        )
    ).scalar()
    if existing is not None:
        raise Conflict("Student is already enrolled in this group")

    if group.max_capacity is not None and count_students(db, group.id) >= group.max_capacity:
        raise Conflict("Student group is at maximum capacity")

    enrollment = StudentGroupEnrollment(
        school_id=group.school_id,
        group_id=group.id,
        student_id=student.id,
        enrollment_date=data.enrollment_date,
        status=data.status,
    )
    db.add(enrollment)
    db.commit()
    db.refresh(enrollment)
    logger.info("Élève %s inscrit dans le groupe %s", student.id, group.id)
    return enrollment


def remove_student(db: Session, tenant: Tenant, group_id: int, student_id: int) -> bool:
    """Retire un élève du groupe. Retourne False si le groupe ou l'inscription est introuvable."""
    group = groups.get(db, tenant, group_id)
    if group is None:
        return False
    enrollment = db.execute(
        select(StudentGroupEnrollment).where(
            StudentGroupEnrollment.group_id == group.id,
            StudentGroupEnrollment.student_id == student_id,
        )
    ).scalar_one_or_none()
    if enrollment is None:
        return False

    ensure_deletion_allowed(db, tenant)
    db.delete(enrollment)
    db.commit()
    logger.info("Élève %s retiré du groupe %s", student_id, group_id)
    return True
