"""
Modèle de rôles canonique.

Un seul schéma, lié aux écoles : superadmin est le seul rôle transversal
(school_id NULL), tous les autres appartiennent à exactement une école.
"""

from enum import Enum


class Role(str, Enum):
    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    SECRETARIAT = "secretariat"
    TEACHER = "teacher"
    GUARDIAN = "guardian"
    STUDENT = "student"


ALL_ROLES = tuple(Role)

# Gestion des données de référence
STAFF = (Role.SUPERADMIN, Role.ADMIN, Role.SECRETARIAT)

# Présences et notes
EDUCATORS = STAFF + (Role.TEACHER,)

# Comptes de connexion
ACCOUNT_MANAGERS = (Role.SUPERADMIN, Role.ADMIN)


def is_cross_tenant(role: str) -> bool:
    return role == Role.SUPERADMIN.value


def role_values(roles) -> frozenset[str]:
    return frozenset(r.value if isinstance(r, Role) else str(r) for r in roles)
