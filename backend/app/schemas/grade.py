"""
Schémas Pydantic pour les évaluations.
"""

import datetime as dt
from typing import Optional

from pydantic import field_validator, model_validator

from app.schemas.common import ApiModel, DateField, IntField, OptionalDate, OptionalInt, OptionalStr, not_blank


class GradeCreate(ApiModel):
    student_id: IntField
    course_id: IntField
    assessment_type: str
    score: IntField
    max_score: IntField
    date: DateField
    remarks: OptionalStr = None
    school_id: OptionalInt = None

    @field_validator("assessment_type")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("score")
    @classmethod
    def not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Score cannot be negative")
        return v

    @field_validator("max_score")
    @classmethod
    def at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Maximum score must be at least 1")
        return v

    @model_validator(mode="after")
    def score_within_max(self):
        if self.score > self.max_score:
            raise ValueError("Score cannot exceed maximum score")
        return self


class GradeUpdate(ApiModel):
    assessment_type: Optional[str] = None
    score: OptionalInt = None
    max_score: OptionalInt = None
    date: OptionalDate = None
    remarks: OptionalStr = None

    @field_validator("assessment_type")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)

    @field_validator("score")
    @classmethod
    def not_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("Score cannot be negative")
        return v

    @field_validator("max_score")
    @classmethod
    def at_least_one(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Maximum score must be at least 1")
        return v


class GradeResponse(ApiModel):
    id: int
    school_id: int
    student_id: int
    course_id: int
    assessment_type: str
    score: int
    max_score: int
    date: dt.date
    remarks: Optional[str]
