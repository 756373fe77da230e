"""
Service métier pour les tuteurs légaux et leurs liens avec les élèves.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.tenant import Tenant
from app.errors import Conflict, ValidationFailed
from app.models.guardian import Guardian, StudentGuardian
from app.models.student import Student
from app.models.user import User
from app.schemas.guardian import StudentGuardianCreate
from app.services.crud import TenantCrud, ensure_deletion_allowed

logger = logging.getLogger(__name__)

guardians = TenantCrud(
    Guardian,
    "Guardian",
    search_columns=("first_name", "last_name", "email"),
    order_by=("last_name", "first_name"),
    unique_fields={"email": "email"},
    references={"user_id": (User, "User")},
    dependents=((StudentGuardian, "guardian_id", "student links"),),
)


def get_links(db: Session, tenant: Tenant, guardian_id: int) -> Optional[list[StudentGuardian]]:
    """Retourne les liens élève du tuteur, ou None si le tuteur est introuvable."""
    guardian = guardians.get(db, tenant, guardian_id)
    if guardian is None:
        return None
    return list(db.execute(
        select(StudentGuardian)
        .where(StudentGuardian.guardian_id == guardian.id)
        .order_by(StudentGuardian.id)
    ).scalars().all())


def link_student(
    db: Session, tenant: Tenant, guardian_id: int, data: StudentGuardianCreate
) -> Optional[StudentGuardian]:
    """
    Lie un élève de la même école au tuteur.
    Retourne None si le tuteur est introuvable.
    """
    guardian = guardians.get(db, tenant, guardian_id)
    if guardian is None:
        return None

    student = db.get(Student, data.student_id)
    if student is None or student.school_id != guardian.school_id:
        raise ValidationFailed.field("studentId", "Student not found")

    existing = db.execute(
        select(StudentGuardian.id).where(
            StudentGuardian.student_id == student.id,
            StudentGuardian.guardian_id == guardian.id,
        )
    ).scalar()
    if existing is not None:
        raise Conflict("Student is already linked to this guardian")

    link = StudentGuardian(
        school_id=guardian.school_id,
        student_id=student.id,
        guardian_id=guardian.id,
        relationship_type=data.relationship_type or guardian.relationship,
        is_primary=data.is_primary,
    )
    db.add(link)
    db.commit()
    db.refresh(link)
    logger.info("Élève %s lié au tuteur %s", student.id, guardian.id)
    return link


def unlink_student(db: Session, tenant: Tenant, guardian_id: int, link_id: int) -> bool:
    """Supprime un lien élève ↔ tuteur. Retourne False si introuvable."""
    guardian = guardians.get(db, tenant, guardian_id)
    if guardian is None:
        return False
    link = db.get(StudentGuardian, link_id)
    if link is None or link.guardian_id != guardian.id:
        return False

    ensure_deletion_allowed(db, tenant)
    db.delete(link)
    db.commit()
    logger.info("Lien élève/tuteur supprimé : id=%s", link_id)
    return True
