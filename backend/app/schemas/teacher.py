"""
Schémas Pydantic pour les enseignants.
"""

import datetime as dt
from typing import Literal, Optional

from pydantic import EmailStr, field_validator

from app.schemas.common import ApiModel, OptionalDate, OptionalInt, OptionalStr, not_blank

TeacherStatus = Literal["active", "inactive", "on_leave"]


class TeacherCreate(ApiModel):
    teacher_id: str
    first_name: str
    last_name: str
    email: Optional[EmailStr] = None
    phone: OptionalStr = None
    specialty: OptionalStr = None
    hire_date: OptionalDate = None
    status: TeacherStatus = "active"
    user_id: OptionalInt = None
    school_id: OptionalInt = None

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("teacher_id", "first_name", "last_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)


class TeacherUpdate(ApiModel):
    teacher_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: OptionalStr = None
    specialty: OptionalStr = None
    hire_date: OptionalDate = None
    status: Optional[TeacherStatus] = None
    user_id: OptionalInt = None

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("teacher_id", "first_name", "last_name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)


class TeacherResponse(ApiModel):
    id: int
    school_id: int
    teacher_id: str
    first_name: str
    last_name: str
    email: Optional[str]
    phone: Optional[str]
    specialty: Optional[str]
    hire_date: Optional[dt.date]
    status: str
    user_id: Optional[int]
    created_at: Optional[dt.datetime]
    updated_at: Optional[dt.datetime]
