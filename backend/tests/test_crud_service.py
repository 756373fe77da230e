"""
Tests unitaires du service CRUD générique et des règles d'inscription.
La session SQLAlchemy est simulée : aucune base n'est nécessaire.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from app.auth.tenant import CurrentUser, Tenant
from app.errors import Conflict, Forbidden, ValidationFailed
from app.models.program import Program
from app.models.school import School
from app.schemas.program import ProgramCreate, ProgramUpdate
from app.services.enrollment_service import _release_seat, _reserve_seat
from app.services.program_service import programs


# --- Helpers ---

def make_tenant(school_id=1, role="admin"):
    user = CurrentUser(id=10, email=f"{role}@mymadrassa.nl", role=role, school_id=school_id)
    return Tenant.for_user(user)


def make_program_mock(program_id=5, school_id=1):
    p = MagicMock()
    p.id = program_id
    p.school_id = school_id
    return p


def make_school_mock(allow_deletion=True):
    s = MagicMock()
    s.allow_deletion = allow_deletion
    return s


def make_db_mock(program=None, school=None, scalar_value=None):
    db = MagicMock()
    db.get.side_effect = lambda model, _id: school if model is School else program
    db.execute.return_value.scalar.return_value = scalar_value
    return db


# ============================================================
# get
# ============================================================

def test_get_autre_ecole_invisible():
    db = make_db_mock(program=make_program_mock(school_id=2))
    assert programs.get(db, make_tenant(school_id=1), 5) is None


def test_get_superadmin_voit_tout():
    program = make_program_mock(school_id=2)
    db = make_db_mock(program=program)
    assert programs.get(db, make_tenant(school_id=None, role="superadmin"), 5) is program


# ============================================================
# create
# ============================================================

def test_create_rattache_a_l_ecole_de_l_appelant():
    db = make_db_mock(scalar_value=None)
    data = ProgramCreate(name="Hifz", code="HFZ", duration=3, school_id=99)

    program = programs.create(db, make_tenant(school_id=1), data)

    assert isinstance(program, Program)
    assert program.school_id == 1
    assert program.code == "HFZ"
    db.add.assert_called_once_with(program)
    db.commit.assert_called_once()


def test_create_code_duplique():
    db = make_db_mock(scalar_value=7)
    data = ProgramCreate(name="Hifz", code="HFZ", duration=3)

    with pytest.raises(Conflict, match="Program code already exists"):
        programs.create(db, make_tenant(), data)

    db.add.assert_not_called()


def test_create_superadmin_ecole_inconnue():
    db = make_db_mock(school=None)
    data = ProgramCreate(name="Hifz", code="HFZ", duration=3, school_id=42)

    with pytest.raises(ValidationFailed) as exc:
        programs.create(db, make_tenant(school_id=None, role="superadmin"), data)

    assert exc.value.errors == [{"path": "schoolId", "message": "School not found"}]


def test_create_integrity_error_rollback():
    db = make_db_mock(scalar_value=None)
    db.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

    with pytest.raises(Conflict):
        programs.create(db, make_tenant(), ProgramCreate(name="Hifz", code="HFZ", duration=3))

    db.rollback.assert_called_once()


# ============================================================
# update
# ============================================================

def test_update_introuvable():
    db = make_db_mock(program=None)
    assert programs.update(db, make_tenant(), 5, ProgramUpdate(name="Tajwid")) is None
    db.commit.assert_not_called()


def test_update_null_sur_champ_obligatoire():
    db = make_db_mock(program=make_program_mock())

    with pytest.raises(ValidationFailed) as exc:
        programs.update(db, make_tenant(), 5, ProgramUpdate(name=None))

    assert exc.value.errors[0]["path"] == "name"


# ============================================================
# delete
# ============================================================

def test_delete_bloque_par_dependances():
    db = make_db_mock(program=make_program_mock(), school=make_school_mock(), scalar_value=1)

    with pytest.raises(Conflict, match="courses"):
        programs.delete(db, make_tenant(), 5)

    db.delete.assert_not_called()


def test_delete_interdit_par_l_ecole():
    db = make_db_mock(program=make_program_mock(), school=make_school_mock(allow_deletion=False))

    with pytest.raises(Forbidden):
        programs.delete(db, make_tenant(), 5)

    db.delete.assert_not_called()


def test_delete_ok():
    program = make_program_mock()
    db = make_db_mock(program=program, school=make_school_mock(), scalar_value=None)

    assert programs.delete(db, make_tenant(), 5) is True
    db.delete.assert_called_once_with(program)
    db.commit.assert_called_once()


# ============================================================
# Places dans un cours
# ============================================================

def test_reserve_seat():
    course = MagicMock(capacity=2, enrolled=1)
    _reserve_seat(course)
    assert course.enrolled == 2


def test_reserve_seat_cours_complet():
    course = MagicMock(capacity=2, enrolled=2)
    with pytest.raises(Conflict, match="maximum capacity"):
        _reserve_seat(course)
    assert course.enrolled == 2


def test_release_seat_jamais_negatif():
    course = MagicMock(enrolled=0)
    _release_seat(course)
    assert course.enrolled == 0
