"""
Contexte de l'appelant et filtre de tenant.

Tenant est passé explicitement à chaque fonction de service qui touche une
table rattachée à une école : oublier le filtre devient impossible, la
signature l'exige.
"""

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import Select

from app.auth.roles import is_cross_tenant
from app.errors import Forbidden, ValidationFailed


@dataclass(frozen=True)
class CurrentUser:
    id: int
    email: str
    role: str
    school_id: Optional[int]
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_model(cls, user: Any) -> "CurrentUser":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            school_id=user.school_id,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    @property
    def is_superadmin(self) -> bool:
        return is_cross_tenant(self.role)

    @property
    def name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p) or self.email


@dataclass(frozen=True)
class Tenant:
    """
    Périmètre de données de l'appelant.
    school_id None = accès à toutes les écoles (superadmin uniquement).
    """
    school_id: Optional[int]
    user: CurrentUser

    @classmethod
    def for_user(cls, user: CurrentUser) -> "Tenant":
        if user.is_superadmin:
            return cls(school_id=None, user=user)
        if user.school_id is None:
            raise Forbidden("School context required")
        return cls(school_id=user.school_id, user=user)

    @property
    def is_global(self) -> bool:
        return self.school_id is None

    def apply(self, stmt: Select, model: Any, school_id: Optional[int] = None) -> Select:
        """
        Ajoute le filtre school_id à une requête.
        Un superadmin peut restreindre volontairement à une école via school_id.
        """
        if self.school_id is not None:
            return stmt.where(model.school_id == self.school_id)
        if school_id is not None:
            return stmt.where(model.school_id == school_id)
        return stmt

    def owns(self, row: Any) -> bool:
        return row is not None and (self.school_id is None or row.school_id == self.school_id)

    def school_for_create(self, requested: Optional[int]) -> int:
        """École de rattachement d'un nouvel enregistrement."""
        if self.school_id is not None:
            return self.school_id
        if requested is None:
            raise ValidationFailed.field("schoolId", "schoolId is required for cross-school accounts")
        return requested
