"""
Service métier pour les comptes de connexion.

Invariant : school_id est NULL si et seulement si le rôle est superadmin.
Seul un superadmin peut créer ou modifier un compte superadmin.
L'email est unique sur toute la plateforme (et non par école).
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.auth.roles import Role
from app.auth.security import hash_password
from app.auth.tenant import Tenant
from app.errors import Conflict, Forbidden, ValidationFailed
from app.models.guardian import Guardian
from app.models.school import School
from app.models.student import Student
from app.models.teacher import Teacher
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate
from app.services.crud import TenantCrud

logger = logging.getLogger(__name__)

users = TenantCrud(
    User,
    "User",
    search_columns=("email", "first_name", "last_name"),
    order_by=("email",),
    dependents=(
        (Student, "user_id", "student profile"),
        (Teacher, "user_id", "teacher profile"),
        (Guardian, "user_id", "guardian profile"),
    ),
)


def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    stmt = select(User.id).where(func.lower(User.email) == email.lower())
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    if db.execute(stmt).scalar() is not None:
        raise Conflict("User email already exists")


def _check_role_assignment(tenant: Tenant, role: Role) -> None:
    if role == Role.SUPERADMIN and not tenant.is_global:
        raise Forbidden("Only a superadmin can manage superadmin accounts")


def _resolve_school(db: Session, tenant: Tenant, role: Role, requested: Optional[int]) -> Optional[int]:
    """École du compte selon son rôle."""
    if role == Role.SUPERADMIN:
        if requested is not None:
            raise ValidationFailed.field("schoolId", "A superadmin account cannot belong to a school")
        return None

    school_id = tenant.school_for_create(requested)
    if db.get(School, school_id) is None:
        raise ValidationFailed.field("schoolId", "School not found")
    return school_id


def create_user(db: Session, tenant: Tenant, data: UserCreate) -> User:
    _check_role_assignment(tenant, data.role)
    school_id = _resolve_school(db, tenant, data.role, data.school_id)
    _ensure_email_free(db, data.email)

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role.value,
        school_id=school_id,
        is_active=data.is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Compte créé : id=%s, rôle=%s, école=%s", user.id, user.role, school_id)
    return user


def update_user(db: Session, tenant: Tenant, user_id: int, data: UserUpdate) -> Optional[User]:
    """Met à jour un compte. Le mot de passe fourni est re-hashé."""
    user = users.get(db, tenant, user_id)
    if user is None:
        return None

    values = data.model_dump(exclude_unset=True)
    users.check_not_null({k: v for k, v in values.items() if k != "school_id"})

    role = Role(values.pop("role", None) or user.role)
    _check_role_assignment(tenant, role)

    if "school_id" in values and not tenant.is_global:
        raise Forbidden("Only a superadmin can move an account to another school")
    default_school = None if role == Role.SUPERADMIN else user.school_id
    requested_school = values.pop("school_id", default_school)
    user.school_id = _resolve_school(db, tenant, role, requested_school)
    user.role = role.value

    password = values.pop("password", None)
    if password:
        user.password_hash = hash_password(password)

    email = values.get("email")
    if email and email != user.email:
        _ensure_email_free(db, email, exclude_id=user.id)

    for field, value in values.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, tenant: Tenant, user_id: int) -> bool:
    if user_id == tenant.user.id:
        raise Conflict("You cannot delete your own account")
    return users.delete(db, tenant, user_id)
