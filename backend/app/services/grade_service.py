"""
Service métier pour les évaluations.
"""

from sqlalchemy.orm import Session

from app.errors import ValidationFailed
from app.models.grade import Grade
from app.models.program import Course
from app.models.student import Student
from app.services.crud import TenantCrud


class GradeCrud(TenantCrud):
    def before_update(self, db: Session, obj: Grade, values: dict) -> None:
        """Le score fusionné (ancien + nouveau) doit rester ≤ max_score."""
        score = values.get("score", obj.score)
        max_score = values.get("max_score", obj.max_score)
        if score > max_score:
            raise ValidationFailed.field("score", "Score cannot exceed maximum score")


grades = GradeCrud(
    Grade,
    "Grade",
    search_columns=("assessment_type", "remarks"),
    order_by=("-date",),
    references={
        "student_id": (Student, "Student"),
        "course_id": (Course, "Course"),
    },
)
