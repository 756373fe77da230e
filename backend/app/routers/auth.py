"""
Router d'authentification par cookie de session.
POST /api/auth/login, POST /api/auth/logout, GET /api/auth/me
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.auth.dependencies import SESSION_USER_KEY, require_session
from app.auth.tenant import CurrentUser
from app.database import get_db
from app.errors import Unauthenticated
from app.schemas.user import LoginRequest, LoginResponse, SessionUser
from app.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentification"])


@router.post("/login", response_model=LoginResponse, summary="Se connecter")
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """Vérifie les identifiants et ouvre une session (cookie signé)."""
    user = auth_service.authenticate(db, data.email, data.password)
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    return {"message": "Login successful", "user": auth_service.session_profile(db, user.id)}


@router.post("/logout", summary="Se déconnecter")
def logout(request: Request):
    user_id = request.session.get(SESSION_USER_KEY)
    request.session.clear()
    if user_id is not None:
        logger.info("Déconnexion de l'utilisateur %s", user_id)
    return {"message": "Logged out"}


@router.get("/me", response_model=SessionUser, summary="Utilisateur connecté")
def me(user: CurrentUser = Depends(require_session), db: Session = Depends(get_db)):
    profile = auth_service.session_profile(db, user.id)
    if profile is None:
        raise Unauthenticated("Invalid user session")
    return profile
