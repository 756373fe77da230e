"""
Schémas Pydantic pour les groupes d'élèves (classes).
"""

import datetime as dt
from typing import Literal, Optional

from pydantic import field_validator

from app.schemas.common import ApiModel, IntField, OptionalDate, OptionalInt, OptionalStr, not_blank


class StudentGroupCreate(ApiModel):
    name: str
    academic_year: OptionalStr = None
    program_id: OptionalInt = None
    teacher_id: OptionalInt = None
    max_capacity: OptionalInt = None
    is_active: bool = True
    school_id: OptionalInt = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("max_capacity")
    @classmethod
    def positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Capacity must be at least 1")
        return v


class StudentGroupUpdate(ApiModel):
    name: Optional[str] = None
    academic_year: OptionalStr = None
    program_id: OptionalInt = None
    teacher_id: OptionalInt = None
    max_capacity: OptionalInt = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)

    @field_validator("max_capacity")
    @classmethod
    def positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Capacity must be at least 1")
        return v


class StudentGroupResponse(ApiModel):
    id: int
    school_id: int
    name: str
    academic_year: Optional[str]
    program_id: Optional[int]
    teacher_id: Optional[int]
    max_capacity: Optional[int]
    is_active: bool
    nb_students: int = 0
    created_at: Optional[dt.datetime]


class GroupEnrollmentCreate(ApiModel):
    """Corps de requête pour inscrire un élève dans un groupe."""
    student_id: IntField
    enrollment_date: OptionalDate = None
    status: Literal["active", "inactive"] = "active"


class GroupEnrollmentResponse(ApiModel):
    id: int
    school_id: int
    student_id: int
    group_id: int
    enrollment_date: Optional[dt.date]
    status: str
