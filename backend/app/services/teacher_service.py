"""
Service métier pour le personnel enseignant.
"""

from app.models.attendance import TeacherAttendance
from app.models.program import Course
from app.models.school_class import StudentGroup
from app.models.teacher import Teacher
from app.models.user import User
from app.services.crud import TenantCrud

teachers = TenantCrud(
    Teacher,
    "Teacher",
    search_columns=("first_name", "last_name", "teacher_id", "email", "specialty"),
    order_by=("last_name", "first_name"),
    unique_fields={"teacher_id": "ID", "email": "email"},
    references={"user_id": (User, "User")},
    dependents=(
        (Course, "teacher_id", "courses"),
        (StudentGroup, "teacher_id", "student groups"),
        (TeacherAttendance, "teacher_id", "attendance records"),
    ),
)
