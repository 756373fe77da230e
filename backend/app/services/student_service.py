"""
Service métier pour les élèves.
studentId et email sont uniques au sein d'une école.
"""

from app.models.attendance import Attendance
from app.models.enrollment import Enrollment
from app.models.fee import Fee
from app.models.grade import Grade
from app.models.guardian import StudentGuardian
from app.models.program import Program
from app.models.school_class import StudentGroupEnrollment
from app.models.student import Student
from app.models.user import User
from app.services.crud import TenantCrud

students = TenantCrud(
    Student,
    "Student",
    search_columns=("first_name", "last_name", "student_id", "email"),
    order_by=("last_name", "first_name"),
    unique_fields={"student_id": "ID", "email": "email"},
    references={
        "program_id": (Program, "Program"),
        "user_id": (User, "User"),
    },
    dependents=(
        (Enrollment, "student_id", "enrollments"),
        (StudentGroupEnrollment, "student_id", "group enrollments"),
        (Attendance, "student_id", "attendance records"),
        (Grade, "student_id", "grades"),
        (Fee, "student_id", "fees"),
        (StudentGuardian, "student_id", "guardian links"),
    ),
)
