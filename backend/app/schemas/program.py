"""
Schémas Pydantic du catalogue : programmes et cours.
"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator, model_validator

from app.schemas.common import ApiModel, IntField, OptionalInt, OptionalStr, not_blank


class ProgramCreate(ApiModel):
    name: str
    code: str
    description: OptionalStr = None
    duration: IntField
    department: OptionalStr = None
    is_active: bool = True
    school_id: OptionalInt = None

    @field_validator("name", "code")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("duration")
    @classmethod
    def at_least_one_year(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Duration must be at least 1 year")
        return v


class ProgramUpdate(ApiModel):
    name: Optional[str] = None
    code: Optional[str] = None
    description: OptionalStr = None
    duration: OptionalInt = None
    department: OptionalStr = None
    is_active: Optional[bool] = None

    @field_validator("name", "code")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)

    @field_validator("duration")
    @classmethod
    def at_least_one_year(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Duration must be at least 1 year")
        return v


class ProgramResponse(ApiModel):
    id: int
    school_id: int
    name: str
    code: str
    description: Optional[str]
    duration: int
    department: Optional[str]
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class CourseCreate(ApiModel):
    name: str
    code: str
    description: OptionalStr = None
    credits: IntField = 1
    program_id: OptionalInt = None
    teacher_id: OptionalInt = None
    capacity: IntField
    enrolled: IntField = 0
    is_active: bool = True
    school_id: OptionalInt = None

    @field_validator("name", "code")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("credits", "capacity")
    @classmethod
    def at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Must be at least 1")
        return v

    @field_validator("enrolled")
    @classmethod
    def not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Cannot be negative")
        return v

    @model_validator(mode="after")
    def enrolled_within_capacity(self):
        if self.enrolled > self.capacity:
            raise ValueError("Enrolled cannot exceed capacity")
        return self


class CourseUpdate(ApiModel):
    name: Optional[str] = None
    code: Optional[str] = None
    description: OptionalStr = None
    credits: OptionalInt = None
    program_id: OptionalInt = None
    teacher_id: OptionalInt = None
    capacity: OptionalInt = None
    is_active: Optional[bool] = None

    @field_validator("name", "code")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)

    @field_validator("credits", "capacity")
    @classmethod
    def at_least_one(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Must be at least 1")
        return v


class CourseResponse(ApiModel):
    id: int
    school_id: int
    name: str
    code: str
    description: Optional[str]
    credits: int
    program_id: Optional[int]
    teacher_id: Optional[int]
    capacity: int
    enrolled: int
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
