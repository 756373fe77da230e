"""
Schémas Pydantic pour les comptes de connexion et la session.
Le hash du mot de passe n'apparaît dans aucun schéma de réponse.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, field_validator

from app.auth.roles import Role
from app.schemas.common import ApiModel, OptionalInt, OptionalStr
from app.schemas.school import SchoolSummary

MIN_PASSWORD_LENGTH = 6


class LoginRequest(ApiModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class UserCreate(ApiModel):
    email: EmailStr
    password: str
    first_name: OptionalStr = None
    last_name: OptionalStr = None
    role: Role
    school_id: OptionalInt = None
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def strong_enough(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v


class UserUpdate(ApiModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    first_name: OptionalStr = None
    last_name: OptionalStr = None
    role: Optional[Role] = None
    school_id: OptionalInt = None
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def lowercase(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("password")
    @classmethod
    def strong_enough(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v


class UserResponse(ApiModel):
    id: int
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    role: str
    school_id: Optional[int]
    is_active: bool
    last_login: Optional[datetime]
    created_at: Optional[datetime]


class SessionUser(ApiModel):
    """Utilisateur connecté tel que renvoyé par /auth/login et /auth/me."""
    id: int
    email: str
    role: str
    school_id: Optional[int]
    first_name: Optional[str]
    last_name: Optional[str]
    school: Optional[SchoolSummary] = None


class LoginResponse(ApiModel):
    message: str
    user: SessionUser
