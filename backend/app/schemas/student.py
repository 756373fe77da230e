"""
Schémas Pydantic pour les élèves.
"""

import datetime as dt
from typing import List, Literal, Optional

from pydantic import EmailStr, field_validator

from app.schemas.common import ApiModel, OptionalDate, OptionalInt, OptionalStr, not_blank

StudentStatus = Literal["active", "inactive", "graduated", "suspended"]


class StudentCreate(ApiModel):
    """Schéma de création manuelle d'un élève (POST /students)."""
    student_id: str
    first_name: str
    last_name: str
    email: Optional[EmailStr] = None
    phone: OptionalStr = None
    date_of_birth: OptionalDate = None
    gender: OptionalStr = None
    address: OptionalStr = None
    program_id: OptionalInt = None
    enrollment_year: OptionalInt = None
    status: StudentStatus = "active"
    user_id: OptionalInt = None
    school_id: OptionalInt = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email(cls, v):
        return None if isinstance(v, str) and not v.strip() else v

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("student_id", "first_name", "last_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)


class StudentUpdate(ApiModel):
    """Schéma de mise à jour d'un élève. Les champs absents ne sont pas modifiés."""
    student_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: OptionalStr = None
    date_of_birth: OptionalDate = None
    gender: OptionalStr = None
    address: OptionalStr = None
    program_id: OptionalInt = None
    enrollment_year: OptionalInt = None
    status: Optional[StudentStatus] = None
    user_id: OptionalInt = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email(cls, v):
        return None if isinstance(v, str) and not v.strip() else v

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("student_id", "first_name", "last_name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)


class StudentResponse(ApiModel):
    id: int
    school_id: int
    student_id: str
    first_name: str
    last_name: str
    email: Optional[str]
    phone: Optional[str]
    date_of_birth: Optional[dt.date]
    gender: Optional[str]
    address: Optional[str]
    program_id: Optional[int]
    enrollment_year: Optional[int]
    status: str
    user_id: Optional[int]
    created_at: Optional[dt.datetime]
    updated_at: Optional[dt.datetime]


class StudentImportRow(ApiModel):
    """Représente une ligne valide du CSV après parsing."""
    student_id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    program_code: Optional[str] = None


class ImportError(ApiModel):
    """Détail d'une ligne rejetée lors de l'import."""
    row: int
    content: str
    reason: str


class StudentImportReport(ApiModel):
    """Rapport retourné après un import CSV."""
    total_rows: int
    inserted: int
    rejected: int
    duplicates_in_file: int
    duplicates_in_db: int
    errors: List[ImportError]
