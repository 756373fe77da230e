"""
Service métier pour les présences des élèves et des enseignants.
Une seule présence par élève, cours et jour ; une seule par enseignant et jour.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.errors import Conflict
from app.models.attendance import Attendance, TeacherAttendance
from app.models.program import Course
from app.models.student import Student
from app.models.teacher import Teacher
from app.services.crud import TenantCrud


class AttendanceCrud(TenantCrud):
    def _ensure_free_slot(self, db: Session, student_id: int, course_id: int, day, exclude_id=None) -> None:
        stmt = select(Attendance.id).where(
            Attendance.student_id == student_id,
            Attendance.course_id == course_id,
            Attendance.date == day,
        )
        if exclude_id is not None:
            stmt = stmt.where(Attendance.id != exclude_id)
        if db.execute(stmt).scalar() is not None:
            raise Conflict("Attendance already recorded for this student, course and date")

    def before_create(self, db: Session, school_id: int, values: dict) -> None:
        self._ensure_free_slot(db, values["student_id"], values["course_id"], values["date"])

    def before_update(self, db: Session, obj: Attendance, values: dict) -> None:
        day = values.get("date")
        if day is not None and day != obj.date:
            self._ensure_free_slot(db, obj.student_id, obj.course_id, day, exclude_id=obj.id)


class TeacherAttendanceCrud(TenantCrud):
    def _ensure_free_slot(self, db: Session, teacher_id: int, day, exclude_id=None) -> None:
        stmt = select(TeacherAttendance.id).where(
            TeacherAttendance.teacher_id == teacher_id,
            TeacherAttendance.date == day,
        )
        if exclude_id is not None:
            stmt = stmt.where(TeacherAttendance.id != exclude_id)
        if db.execute(stmt).scalar() is not None:
            raise Conflict("Attendance already recorded for this teacher and date")

    def before_create(self, db: Session, school_id: int, values: dict) -> None:
        self._ensure_free_slot(db, values["teacher_id"], values["date"])

    def before_update(self, db: Session, obj: TeacherAttendance, values: dict) -> None:
        day = values.get("date")
        if day is not None and day != obj.date:
            self._ensure_free_slot(db, obj.teacher_id, day, exclude_id=obj.id)


attendance = AttendanceCrud(
    Attendance,
    "Attendance",
    search_columns=("remarks",),
    order_by=("-date",),
    references={
        "student_id": (Student, "Student"),
        "course_id": (Course, "Course"),
    },
)

teacher_attendance = TeacherAttendanceCrud(
    TeacherAttendance,
    "Teacher attendance",
    search_columns=("remarks",),
    order_by=("-date",),
    references={"teacher_id": (Teacher, "Teacher")},
)
