"""
Schémas Pydantic pour les inscriptions élève ↔ cours.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import field_validator

from app.schemas.common import ApiModel, IntField, OptionalInt, OptionalStr

EnrollmentStatus = Literal["active", "completed", "dropped"]


class EnrollmentCreate(ApiModel):
    student_id: IntField
    course_id: IntField
    status: EnrollmentStatus = "active"
    grade: OptionalStr = None
    final_score: OptionalInt = None
    school_id: OptionalInt = None


class EnrollmentUpdate(ApiModel):
    """Seuls le statut et le résultat sont modifiables ; le couple élève/cours est figé."""
    status: Optional[EnrollmentStatus] = None
    grade: OptionalStr = None
    final_score: OptionalInt = None

    @field_validator("final_score")
    @classmethod
    def within_range(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 0 <= v <= 100:
            raise ValueError("Final score must be between 0 and 100")
        return v


class EnrollmentResponse(ApiModel):
    id: int
    school_id: int
    student_id: int
    course_id: int
    enrollment_date: Optional[datetime]
    status: str
    grade: Optional[str]
    final_score: Optional[int]
