"""
Statistiques du tableau de bord, calculées dans le périmètre de l'appelant.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.auth.tenant import Tenant
from app.models.attendance import Attendance
from app.models.program import Course, Program
from app.models.student import Student
from app.models.teacher import Teacher
from app.schemas.dashboard import DashboardStats

# Statuts comptés comme présents pour le taux de présence
PRESENT_STATUSES = ("present", "late")


def _count(db: Session, tenant: Tenant, school_id: Optional[int], model, *conditions) -> int:
    stmt = tenant.apply(select(func.count(model.id)), model, school_id)
    if conditions:
        stmt = stmt.where(*conditions)
    return db.execute(stmt).scalar() or 0


def get_stats(db: Session, tenant: Tenant, school_id: Optional[int] = None) -> DashboardStats:
    """school_id ne restreint que les appels transversaux (superadmin)."""
    total_records = _count(db, tenant, school_id, Attendance)
    present = _count(db, tenant, school_id, Attendance, Attendance.status.in_(PRESENT_STATUSES))
    rate = round(present / total_records * 100, 1) if total_records else 0.0

    return DashboardStats(
        total_students=_count(db, tenant, school_id, Student),
        active_courses=_count(db, tenant, school_id, Course, Course.is_active.is_(True)),
        total_programs=_count(db, tenant, school_id, Program),
        total_teachers=_count(db, tenant, school_id, Teacher),
        attendance_rate=rate,
    )
