"""
Point d'entrée principal de l'API MyMadrassa.
Démarrage : uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

import app.models  # noqa: F401  enregistre les modèles dans Base.metadata
from app.config import Settings, get_settings
from app.database import Base, build_engine, build_session_factory
from app.errors import register_error_handlers
from app.routers import (
    attendance,
    auth,
    dashboard,
    enrollments,
    events,
    fees,
    grades,
    guardians,
    programs,
    rooms,
    schools,
    student_groups,
    students,
    teachers,
    users,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "MyMadrassa API"
VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Construit l'application : moteur BDD, middlewares, handlers d'erreurs et routers.
    Aucun état global : le moteur et la fabrique de sessions vivent sur app.state.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        """Crée les tables manquantes au démarrage, libère le pool à l'arrêt."""
        if settings.CREATE_TABLES:
            Base.metadata.create_all(bind=engine)
        logger.info("%s démarrée (env=%s)", SERVICE_NAME, settings.ENV)
        yield
        engine.dispose()

    application = FastAPI(
        title=SERVICE_NAME,
        description="API d'administration scolaire multi-écoles",
        version=VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.engine = engine
    application.state.session_factory = build_session_factory(engine)

    # Sessions par cookie signé : le navigateur renvoie le cookie, le serveur lit user_id
    application.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
        https_only=settings.is_production,
    )

    # CORS avec credentials : le cookie de session doit traverser les origines
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[],
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization", "Accept", settings.DEV_USER_HEADER],
    )

    register_error_handlers(application, expose_stack=not settings.is_production)

    application.include_router(auth.router)
    application.include_router(schools.router)
    application.include_router(users.router)
    application.include_router(students.router)
    application.include_router(teachers.router)
    application.include_router(guardians.router)
    application.include_router(programs.router)
    application.include_router(programs.courses_router)
    application.include_router(enrollments.router)
    application.include_router(student_groups.router)
    application.include_router(attendance.router)
    application.include_router(attendance.teacher_router)
    application.include_router(grades.router)
    application.include_router(fees.router)
    application.include_router(events.router)
    application.include_router(rooms.router)
    application.include_router(dashboard.router)

    @application.get("/api/health", tags=["Santé"])
    def health_check():
        """Vérifie que l'API est opérationnelle."""
        return {"status": "ok", "service": SERVICE_NAME, "version": VERSION}

    return application


app = create_app()
