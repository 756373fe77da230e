"""
Dépendances FastAPI d'authentification et d'autorisation.

Chaîne appliquée aux routes sensibles :
require_session → authorize(rôles) → enforce_school_scope
La fabrique scoped(*rôles) compose les trois étapes.
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.auth.roles import Role, role_values
from app.auth.tenant import CurrentUser, Tenant
from app.database import get_db
from app.errors import Forbidden, Unauthenticated
from app.models.user import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def _session_user_id(request: Request):
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is not None:
        return user_id

    # Secours réservé au développement local (clients sans cookie)
    settings = request.app.state.settings
    if settings.is_development:
        header = request.headers.get(settings.DEV_USER_HEADER, "")
        if header.strip().isdigit():
            return int(header)
    return None


def require_session(request: Request, db: Session = Depends(get_db)) -> CurrentUser:
    """Résout l'utilisateur connecté, ou 401."""
    user_id = _session_user_id(request)
    if user_id is None:
        raise Unauthenticated("Authentication required")

    user = db.get(User, user_id)
    if user is None or not user.is_active:
        request.session.clear()
        raise Unauthenticated("Invalid user session")

    return CurrentUser.from_model(user)


def authorize(*roles: Role):
    """Fabrique de dépendance : 403 si le rôle de l'utilisateur n'est pas autorisé."""
    allowed = role_values(roles)

    def dependency(user: CurrentUser = Depends(require_session)) -> CurrentUser:
        if user.role not in allowed:
            logger.warning(
                "Accès refusé : %s (id=%s, %s), rôles requis %s",
                user.name, user.id, user.role, sorted(allowed),
            )
            raise Forbidden("Insufficient permissions", required=allowed, actual=user.role)
        return user

    return dependency


def enforce_school_scope(user: CurrentUser = Depends(require_session)) -> Tenant:
    """Périmètre école de l'appelant ; 403 si un rôle non transversal n'a pas d'école."""
    return Tenant.for_user(user)


def scoped(*roles: Role):
    """Fabrique de dépendance : session + rôle + périmètre école, renvoie le Tenant."""
    checker = authorize(*roles)

    def dependency(user: CurrentUser = Depends(checker)) -> Tenant:
        return enforce_school_scope(user)

    return dependency
