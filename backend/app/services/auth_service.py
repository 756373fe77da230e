"""
Service d'authentification : vérification des identifiants et profil de session.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.auth.security import verify_password
from app.errors import InvalidCredentials
from app.models.school import School
from app.models.user import User
from app.schemas.school import SchoolSummary
from app.schemas.user import SessionUser

logger = logging.getLogger(__name__)


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Vérifie les identifiants et met à jour last_login.
    Compte inconnu, désactivé ou mot de passe erroné → même erreur générique.
    """
    user = db.execute(
        select(User).where(func.lower(User.email) == email.lower())
    ).scalar_one_or_none()

    if user is None or not user.is_active or not verify_password(password, user.password_hash):
        logger.warning("Échec de connexion pour %s", email)
        raise InvalidCredentials()

    user.last_login = datetime.now()
    db.commit()
    db.refresh(user)
    logger.info("Connexion réussie : %s (%s)", user.email, user.role)
    return user


def session_profile(db: Session, user_id: int) -> Optional[SessionUser]:
    """Profil renvoyé au client, avec le résumé de l'école de rattachement."""
    user = db.get(User, user_id)
    if user is None:
        return None

    profile = SessionUser.model_validate(user)
    if user.school_id is not None:
        school = db.get(School, user.school_id)
        if school is not None:
            profile.school = SchoolSummary.model_validate(school)
    return profile
