"""
Service métier pour les inscriptions élève ↔ cours.

Le compteur courses.enrolled suit le nombre d'inscriptions actives :
il est ajusté dans la même transaction que l'inscription elle-même.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.errors import Conflict
from app.models.enrollment import Enrollment
from app.models.program import Course
from app.models.student import Student
from app.services.crud import TenantCrud

ACTIVE = "active"


def _reserve_seat(course: Course) -> None:
    if course.enrolled >= course.capacity:
        raise Conflict("Course is at maximum capacity")
    course.enrolled += 1


def _release_seat(course: Course) -> None:
    course.enrolled = max(course.enrolled - 1, 0)


class EnrollmentCrud(TenantCrud):
    def before_create(self, db: Session, school_id: int, values: dict) -> None:
        duplicate = db.execute(
            select(Enrollment.id).where(
                Enrollment.student_id == values["student_id"],
                Enrollment.course_id == values["course_id"],
            )
        ).scalar()
        if duplicate is not None:
            raise Conflict("Student is already enrolled in this course")

        if values.get("status", ACTIVE) == ACTIVE:
            _reserve_seat(db.get(Course, values["course_id"]))

    def before_update(self, db: Session, obj: Enrollment, values: dict) -> None:
        new_status = values.get("status")
        if new_status is None or new_status == obj.status:
            return
        course = db.get(Course, obj.course_id)
        if new_status == ACTIVE:
            _reserve_seat(course)
        elif obj.status == ACTIVE:
            _release_seat(course)

    def before_delete(self, db: Session, obj: Enrollment) -> None:
        if obj.status == ACTIVE:
            _release_seat(db.get(Course, obj.course_id))


enrollments = EnrollmentCrud(
    Enrollment,
    "Enrollment",
    order_by=("-enrollment_date",),
    references={
        "student_id": (Student, "Student"),
        "course_id": (Course, "Course"),
    },
)
