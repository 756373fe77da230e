"""
Service métier du catalogue : programmes et cours.
"""

from sqlalchemy.orm import Session

from app.errors import ValidationFailed
from app.models.attendance import Attendance
from app.models.enrollment import Enrollment
from app.models.event import Event
from app.models.grade import Grade
from app.models.program import Course, Program
from app.models.school_class import StudentGroup
from app.models.student import Student
from app.models.teacher import Teacher
from app.services.crud import TenantCrud

programs = TenantCrud(
    Program,
    "Program",
    search_columns=("name", "code", "department"),
    order_by=("name",),
    unique_fields={"code": "code"},
    dependents=(
        (Course, "program_id", "courses"),
        (Student, "program_id", "students"),
        (StudentGroup, "program_id", "student groups"),
        (Event, "program_id", "events"),
    ),
)


class CourseCrud(TenantCrud):
    def before_update(self, db: Session, obj: Course, values: dict) -> None:
        """La capacité ne peut pas descendre sous le nombre d'inscrits."""
        capacity = values.get("capacity")
        if capacity is not None and capacity < obj.enrolled:
            raise ValidationFailed.field(
                "capacity", f"Capacity cannot be lower than current enrollments ({obj.enrolled})"
            )


courses = CourseCrud(
    Course,
    "Course",
    search_columns=("name", "code"),
    order_by=("name",),
    unique_fields={"code": "code"},
    references={
        "program_id": (Program, "Program"),
        "teacher_id": (Teacher, "Teacher"),
    },
    dependents=(
        (Enrollment, "course_id", "enrollments"),
        (Attendance, "course_id", "attendance records"),
        (Grade, "course_id", "grades"),
        (Event, "course_id", "events"),
    ),
)
