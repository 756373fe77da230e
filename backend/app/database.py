"""
Configuration de la connexion à la base de données.
Le moteur et la fabrique de sessions sont construits par create_app()
et attachés à app.state : aucun moteur global au niveau du module.
"""

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import Settings

Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    """
    Crée le moteur SQLAlchemy.
    PostgreSQL : pool fixe d'une connexion (compatible serverless).
    SQLite : une seule connexion partagée (tests, démo locale).
    """
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """Dépendance FastAPI — fournit une session BDD et la ferme après usage."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
