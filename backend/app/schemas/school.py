"""
Schémas Pydantic pour les écoles (gérées par le superadmin).
"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from app.schemas.common import ApiModel, OptionalStr, not_blank


class SchoolCreate(ApiModel):
    name: str
    code: str
    address: OptionalStr = None
    phone: OptionalStr = None
    email: OptionalStr = None
    allow_deletion: bool = True
    enable_payments: bool = True
    is_active: bool = True

    @field_validator("name", "code")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)


class SchoolUpdate(ApiModel):
    name: Optional[str] = None
    code: Optional[str] = None
    address: OptionalStr = None
    phone: OptionalStr = None
    email: OptionalStr = None
    allow_deletion: Optional[bool] = None
    enable_payments: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("name", "code")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)


class SchoolSummary(ApiModel):
    id: int
    name: str
    code: str


class SchoolResponse(ApiModel):
    id: int
    name: str
    code: str
    address: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    allow_deletion: bool
    enable_payments: bool
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
