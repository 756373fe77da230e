"""
Service métier pour les écoles.
Réservé au superadmin : les écoles ne sont pas rattachées à un tenant.
"""

import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import Conflict
from app.models.event import Event
from app.models.fee import Fee
from app.models.guardian import Guardian
from app.models.program import Course, Program
from app.models.room import Room
from app.models.school import School
from app.models.school_class import StudentGroup
from app.models.student import Student
from app.models.teacher import Teacher
from app.models.user import User
from app.schemas.common import LIKE_ESCAPE, ListParams
from app.schemas.school import SchoolCreate, SchoolUpdate

logger = logging.getLogger(__name__)

# Tables rattachées à une école qui bloquent sa suppression
SCHOOL_DEPENDENTS = (
    (User, "users"),
    (Student, "students"),
    (Teacher, "teachers"),
    (Guardian, "guardians"),
    (Program, "programs"),
    (Course, "courses"),
    (StudentGroup, "student groups"),
    (Fee, "fees"),
    (Event, "events"),
    (Room, "rooms"),
)


def _ensure_code_free(db: Session, code: str, exclude_id: Optional[int] = None) -> None:
    stmt = select(School.id).where(func.lower(School.code) == code.lower())
    if exclude_id is not None:
        stmt = stmt.where(School.id != exclude_id)
    if db.execute(stmt).scalar() is not None:
        raise Conflict("School code already exists")


def list_schools(db: Session, params: ListParams) -> dict:
    """Retourne les écoles paginées, triées par nom."""
    stmt = select(School)
    pattern = params.search_pattern
    if pattern:
        stmt = stmt.where(or_(
            func.lower(School.name).like(pattern, escape=LIKE_ESCAPE),
            func.lower(School.code).like(pattern, escape=LIKE_ESCAPE),
        ))
    if params.status == "active":
        stmt = stmt.where(School.is_active.is_(True))
    elif params.status == "inactive":
        stmt = stmt.where(School.is_active.is_(False))

    total = db.execute(select(func.count()).select_from(stmt.subquery())).scalar() or 0
    schools = db.execute(
        stmt.order_by(School.name, School.id).offset(params.offset).limit(params.limit)
    ).scalars().all()
    return params.page_of(list(schools), total)


def get_school(db: Session, school_id: int) -> Optional[School]:
    return db.get(School, school_id)


def create_school(db: Session, data: SchoolCreate) -> School:
    _ensure_code_free(db, data.code)
    school = School(**data.model_dump())
    db.add(school)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("School code already exists")
    db.refresh(school)
    logger.info("École créée : id=%s, code=%s", school.id, school.code)
    return school


def update_school(db: Session, school_id: int, data: SchoolUpdate) -> Optional[School]:
    """Met à jour les champs fournis d'une école, y compris ses drapeaux fonctionnels."""
    school = db.get(School, school_id)
    if school is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("code") and update_data["code"] != school.code:
        _ensure_code_free(db, update_data["code"], exclude_id=school.id)

    for field, value in update_data.items():
        if value is not None:
            setattr(school, field, value)

    db.commit()
    db.refresh(school)
    return school


def delete_school(db: Session, school_id: int) -> bool:
    """
    Supprime une école.
    Bloqué tant que des données y sont rattachées.
    """
    school = db.get(School, school_id)
    if school is None:
        return False

    blocking = [
        label for model, label in SCHOOL_DEPENDENTS
        if db.execute(
            select(model.id).where(model.school_id == school.id).limit(1)
        ).scalar() is not None
    ]
    if blocking:
        raise Conflict(f"School has dependent records and cannot be deleted ({', '.join(blocking)})")

    db.delete(school)
    db.commit()
    logger.info("École supprimée : id=%s", school_id)
    return True
