"""
Configuration partagée pour tous les tests.
Chaque test reçoit une application neuve sur SQLite en mémoire (StaticPool) :
aucune connexion réelle à PostgreSQL.
"""

import os

# Doit précéder l'import de app.main, qui construit l'application au chargement
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient

from app.auth.security import hash_password
from app.config import Settings
from app.database import Base
from app.main import create_app
from app.models.school import School
from app.models.user import User

PASSWORD = "secret123"
# Un seul hash bcrypt pour toute la session de tests
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        ENV="test",
        SECRET_KEY="test-secret",
        CREATE_TABLES=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    Base.metadata.create_all(bind=application.state.engine)
    yield application
    Base.metadata.drop_all(bind=application.state.engine)
    application.state.engine.dispose()


@pytest.fixture
def db(app, client):
    """
    Session BDD de test, partageant la connexion de l'application.
    Ouverte après le client et donc fermée avant lui : la sortie du client libère le moteur.
    """
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def client(app):
    """Client HTTP de test ; conserve le cookie de session entre les requêtes."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_school(db):
    counter = {"n": 0}

    def _make(name=None, code=None, **kwargs) -> School:
        counter["n"] += 1
        school = School(
            name=name or f"School {counter['n']}",
            code=code or f"SCH-{counter['n']}",
            **kwargs,
        )
        db.add(school)
        db.commit()
        db.refresh(school)
        return school

    return _make


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role: str, school=None, email=None, **kwargs) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"{role}{counter['n']}@mymadrassa.nl",
            password_hash=PASSWORD_HASH,
            first_name=kwargs.pop("first_name", role.capitalize()),
            last_name=kwargs.pop("last_name", f"User{counter['n']}"),
            role=role,
            school_id=school.id if school is not None else None,
            **kwargs,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def school(make_school):
    return make_school("Al Noor", "ALN")


@pytest.fixture
def other_school(make_school):
    return make_school("Al Huda", "ALH")


@pytest.fixture
def login_as(client, make_user):
    """Crée un utilisateur du rôle donné et ouvre sa session sur le client."""

    def _login(role: str, school=None, **kwargs) -> User:
        user = make_user(role, school, **kwargs)
        response = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        return user

    return _login
