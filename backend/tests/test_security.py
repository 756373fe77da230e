"""
Tests unitaires : hachage des mots de passe, rôles et périmètre de tenant.
"""

import pytest
from sqlalchemy import select

from app.auth.roles import EDUCATORS, STAFF, Role, is_cross_tenant, role_values
from app.auth.security import hash_password, verify_password
from app.auth.tenant import CurrentUser, Tenant
from app.errors import Forbidden, ValidationFailed
from app.models.student import Student


def make_user(role="admin", school_id=1, user_id=1) -> CurrentUser:
    return CurrentUser(id=user_id, email=f"{role}@mymadrassa.nl", role=role, school_id=school_id)


# --- Mots de passe ---

def test_hash_password_verifiable():
    hashed = hash_password("bismillah")
    assert hashed != "bismillah"
    assert verify_password("bismillah", hashed)
    assert not verify_password("autre", hashed)


def test_verify_password_hash_malforme():
    assert verify_password("bismillah", "pas-un-hash") is False


# --- Rôles ---

def test_seul_superadmin_est_transversal():
    assert is_cross_tenant("superadmin")
    assert not any(is_cross_tenant(r.value) for r in Role if r != Role.SUPERADMIN)


def test_groupes_de_roles():
    assert role_values(STAFF) == {"superadmin", "admin", "secretariat"}
    assert role_values(EDUCATORS) == role_values(STAFF) | {"teacher"}


# --- Tenant ---

def test_tenant_superadmin_sans_filtre():
    tenant = Tenant.for_user(make_user("superadmin", school_id=None))
    assert tenant.is_global
    stmt = tenant.apply(select(Student), Student)
    assert "WHERE" not in str(stmt)


def test_tenant_superadmin_filtre_volontaire():
    tenant = Tenant.for_user(make_user("superadmin", school_id=None))
    stmt = tenant.apply(select(Student), Student, school_id=3)
    assert "school_id" in str(stmt)


def test_tenant_role_ecole_filtre_toujours():
    tenant = Tenant.for_user(make_user("teacher", school_id=7))
    assert tenant.school_id == 7
    # Le filtre demandé ne permet pas de sortir de sa propre école
    stmt = tenant.apply(select(Student), Student, school_id=99)
    assert list(stmt.compile().params.values()) == [7]


def test_tenant_role_sans_ecole_refuse():
    with pytest.raises(Forbidden, match="School context required"):
        Tenant.for_user(make_user("admin", school_id=None))


def test_tenant_owns():
    tenant = Tenant.for_user(make_user("admin", school_id=1))

    class Row:
        def __init__(self, school_id):
            self.school_id = school_id

    assert tenant.owns(Row(1))
    assert not tenant.owns(Row(2))
    assert not tenant.owns(None)


def test_school_for_create():
    assert Tenant.for_user(make_user("admin", school_id=4)).school_for_create(9) == 4

    superadmin = Tenant.for_user(make_user("superadmin", school_id=None))
    assert superadmin.school_for_create(9) == 9
    with pytest.raises(ValidationFailed) as exc:
        superadmin.school_for_create(None)
    assert exc.value.errors[0]["path"] == "schoolId"


def test_current_user_name():
    assert CurrentUser(id=1, email="a@b.nl", role="admin", school_id=1, first_name="Khadija", last_name="Ouali").name == "Khadija Ouali"
    assert CurrentUser(id=1, email="a@b.nl", role="admin", school_id=1, first_name="Khadija").name == "Khadija"
    assert make_user().name == "admin@mymadrassa.nl"
