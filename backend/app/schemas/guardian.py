"""
Schémas Pydantic pour les tuteurs et le lien élève ↔ tuteur.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, field_validator

from app.schemas.common import ApiModel, IntField, OptionalInt, OptionalStr, not_blank


class GuardianCreate(ApiModel):
    first_name: str
    last_name: str
    email: EmailStr
    phone: OptionalStr = None
    relationship: OptionalStr = None
    address: OptionalStr = None
    is_emergency_contact: bool = False
    user_id: OptionalInt = None
    school_id: OptionalInt = None

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: str) -> str:
        return v.lower()

    @field_validator("first_name", "last_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)


class GuardianUpdate(ApiModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: OptionalStr = None
    relationship: OptionalStr = None
    address: OptionalStr = None
    is_emergency_contact: Optional[bool] = None
    user_id: OptionalInt = None

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("first_name", "last_name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)


class GuardianResponse(ApiModel):
    id: int
    school_id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str]
    relationship: Optional[str]
    address: Optional[str]
    is_emergency_contact: bool
    user_id: Optional[int]
    created_at: Optional[datetime]


class StudentGuardianCreate(ApiModel):
    """Corps de requête pour lier un élève à un tuteur."""
    student_id: IntField
    relationship_type: OptionalStr = None
    is_primary: bool = False


class StudentGuardianResponse(ApiModel):
    id: int
    school_id: int
    student_id: int
    guardian_id: int
    relationship_type: Optional[str]
    is_primary: bool
