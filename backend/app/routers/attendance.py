"""
Router pour les présences.
/api/attendance : élèves, par cours et par jour.
/api/teacher-attendance : enseignants, par jour.
"""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import EDUCATORS, STAFF
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.attendance import (
    AttendanceCreate,
    AttendanceResponse,
    AttendanceUpdate,
    TeacherAttendanceCreate,
    TeacherAttendanceResponse,
    TeacherAttendanceUpdate,
)
from app.schemas.common import ListParams, Page, list_params
from app.services.attendance_service import attendance, teacher_attendance

router = APIRouter(prefix="/api/attendance", tags=["Présences"])
teacher_router = APIRouter(prefix="/api/teacher-attendance", tags=["Présences enseignants"])

educator_access = scoped(*EDUCATORS)
staff_access = scoped(*STAFF)


@router.get("", response_model=Page[AttendanceResponse], summary="Lister les présences")
def list_attendance(
    student_id: Optional[int] = Query(None, alias="studentId"),
    course_id: Optional[int] = Query(None, alias="courseId"),
    date: Optional[dt.date] = Query(None),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(educator_access),
    db: Session = Depends(get_db),
):
    return attendance.paginate(db, tenant, params, student_id=student_id, course_id=course_id, date=date)


@router.get("/{attendance_id}", response_model=AttendanceResponse, summary="Détail d'une présence")
def get_attendance(attendance_id: int, tenant: Tenant = Depends(educator_access), db: Session = Depends(get_db)):
    record = attendance.get(db, tenant, attendance_id)
    if record is None:
        raise NotFound("Attendance not found")
    return record


@router.post("", response_model=AttendanceResponse, status_code=201, summary="Enregistrer une présence")
def create_attendance(data: AttendanceCreate, tenant: Tenant = Depends(educator_access), db: Session = Depends(get_db)):
    return attendance.create(db, tenant, data)


@router.put("/{attendance_id}", response_model=AttendanceResponse, summary="Modifier une présence")
@router.patch("/{attendance_id}", response_model=AttendanceResponse, summary="Modifier partiellement une présence")
def update_attendance(
    attendance_id: int,
    data: AttendanceUpdate,
    tenant: Tenant = Depends(educator_access),
    db: Session = Depends(get_db),
):
    record = attendance.update(db, tenant, attendance_id, data)
    if record is None:
        raise NotFound("Attendance not found")
    return record


@router.delete("/{attendance_id}", summary="Supprimer une présence")
def delete_attendance(attendance_id: int, tenant: Tenant = Depends(educator_access), db: Session = Depends(get_db)):
    if not attendance.delete(db, tenant, attendance_id):
        raise NotFound("Attendance not found")
    return {"message": "Attendance deleted"}


# --- Présences enseignants ---

@teacher_router.get("", response_model=Page[TeacherAttendanceResponse], summary="Lister les présences enseignants")
def list_teacher_attendance(
    teacher_id: Optional[int] = Query(None, alias="teacherId"),
    date: Optional[dt.date] = Query(None),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(staff_access),
    db: Session = Depends(get_db),
):
    return teacher_attendance.paginate(db, tenant, params, teacher_id=teacher_id, date=date)


@teacher_router.get("/{record_id}", response_model=TeacherAttendanceResponse, summary="Détail d'une présence enseignant")
def get_teacher_attendance(record_id: int, tenant: Tenant = Depends(staff_access), db: Session = Depends(get_db)):
    record = teacher_attendance.get(db, tenant, record_id)
    if record is None:
        raise NotFound("Teacher attendance not found")
    return record


@teacher_router.post(
    "", response_model=TeacherAttendanceResponse, status_code=201, summary="Enregistrer une présence enseignant"
)
def create_teacher_attendance(
    data: TeacherAttendanceCreate,
    tenant: Tenant = Depends(staff_access),
    db: Session = Depends(get_db),
):
    return teacher_attendance.create(db, tenant, data)


@teacher_router.put("/{record_id}", response_model=TeacherAttendanceResponse, summary="Modifier une présence enseignant")
@teacher_router.patch("/{record_id}", response_model=TeacherAttendanceResponse, summary="Modifier partiellement une présence enseignant")
def update_teacher_attendance(
    record_id: int,
    data: TeacherAttendanceUpdate,
    tenant: Tenant = Depends(staff_access),
    db: Session = Depends(get_db),
):
    record = teacher_attendance.update(db, tenant, record_id, data)
    if record is None:
        raise NotFound("Teacher attendance not found")
    return record


@teacher_router.delete("/{record_id}", summary="Supprimer une présence enseignant")
def delete_teacher_attendance(record_id: int, tenant: Tenant = Depends(staff_access), db: Session = Depends(get_db)):
    if not teacher_attendance.delete(db, tenant, record_id):
        raise NotFound("Teacher attendance not found")
    return {"message": "Teacher attendance deleted"}
