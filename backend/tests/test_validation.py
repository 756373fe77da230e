"""
Tests unitaires des coercitions et des schémas de validation.
"""

import datetime as dt
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.schemas.common import ListParams, parse_date, parse_decimal, parse_int
from app.schemas.event import EventCreate
from app.schemas.grade import GradeCreate
from app.schemas.program import CourseCreate, ProgramCreate
from app.schemas.student import StudentCreate, StudentUpdate


# --- Dates ---

@pytest.mark.parametrize("raw, expected", [
    ("2024-09-01", dt.date(2024, 9, 1)),
    ("2024-09-01T08:30:00Z", dt.date(2024, 9, 1)),
    ("01-09-2024", dt.date(2024, 9, 1)),
    ("01/09/2024", dt.date(2024, 9, 1)),
    (dt.date(2024, 9, 1), dt.date(2024, 9, 1)),
    (dt.datetime(2024, 9, 1, 12, 0), dt.date(2024, 9, 1)),
])
def test_parse_date_formats_acceptes(raw, expected):
    assert parse_date(raw) == expected


def test_parse_date_vide_devient_none():
    assert parse_date("") is None
    assert parse_date("   ") is None
    assert parse_date(None) is None


def test_parse_date_invalide():
    with pytest.raises(ValueError, match="Invalid date"):
        parse_date("demain")


# --- Entiers ---

def test_parse_int_chaine_numerique():
    assert parse_int(" 12 ") == 12
    assert parse_int("-3") == -3
    assert parse_int(7) == 7
    assert parse_int(4.0) == 4


def test_parse_int_vide_devient_none():
    assert parse_int("") is None
    assert parse_int(None) is None


@pytest.mark.parametrize("raw", ["12a", "1.5", True, 2.5])
def test_parse_int_invalide(raw):
    with pytest.raises(ValueError):
        parse_int(raw)


# --- Montants ---

def test_parse_decimal_virgule_et_arrondi():
    assert parse_decimal("150,5") == Decimal("150.50")
    assert parse_decimal(99.999) == Decimal("100.00")
    assert parse_decimal("") is None


def test_parse_decimal_invalide():
    with pytest.raises(ValueError):
        parse_decimal("beaucoup")


@pytest.mark.parametrize("raw", ["1e30", "100000000", "99999999.999", "-100000000"])
def test_parse_decimal_hors_colonne(raw):
    """Un montant qui ne tient pas dans Numeric(10, 2) est une erreur de champ."""
    with pytest.raises(ValueError):
        parse_decimal(raw)


def test_parse_decimal_maximum_accepte():
    assert parse_decimal("99999999.99") == Decimal("99999999.99")


# --- Schémas ---

def test_student_create_coercitions():
    """Chaînes vides → null, date libre et entier en texte convertis, email en minuscules."""
    s = StudentCreate.model_validate({
        "studentId": "STU-001",
        "firstName": "  Yusuf ",
        "lastName": "El Amrani",
        "email": "Yusuf@School.NL",
        "dateOfBirth": "15/03/2012",
        "enrollmentYear": "2024",
        "programId": "",
        "phone": "",
    })
    assert s.first_name == "Yusuf"
    assert s.email == "yusuf@school.nl"
    assert s.date_of_birth == dt.date(2012, 3, 15)
    assert s.enrollment_year == 2024
    assert s.program_id is None
    assert s.phone is None
    assert s.status == "active"


def test_student_create_email_vide_accepte():
    s = StudentCreate(student_id="STU-002", first_name="Amina", last_name="Bakkali", email="")
    assert s.email is None


def test_student_create_champs_manquants_tous_signales():
    with pytest.raises(ValidationError) as exc:
        StudentCreate.model_validate({"firstName": "Amina"})
    missing = {err["loc"][0] for err in exc.value.errors()}
    assert missing == {"studentId", "lastName"}


def test_student_create_statut_inconnu():
    with pytest.raises(ValidationError):
        StudentCreate(student_id="STU-003", first_name="A", last_name="B", status="expelled")


def test_student_update_tous_les_champs_optionnels():
    update = StudentUpdate.model_validate({"phone": "0612345678"})
    assert update.model_dump(exclude_unset=True) == {"phone": "0612345678"}


def test_program_create_duree_minimale():
    with pytest.raises(ValidationError):
        ProgramCreate(name="Hifz", code="HFZ", duration=0)
    assert ProgramCreate(name="Hifz", code="HFZ", duration="3").duration == 3


def test_course_create_inscrits_superieurs_capacite():
    with pytest.raises(ValidationError):
        CourseCreate(name="Arabe 1", code="AR1", capacity=10, enrolled=11)


def test_grade_create_score_superieur_max():
    with pytest.raises(ValidationError):
        GradeCreate(student_id=1, course_id=1, assessment_type="exam", score=21, max_score=20, date="2024-10-01")


def test_event_create_dates_inversees():
    with pytest.raises(ValidationError):
        EventCreate(title="Iftar", start_date="2025-03-10", end_date="2025-03-09")


def test_event_create_heure_invalide():
    with pytest.raises(ValidationError):
        EventCreate(title="Iftar", start_date="2025-03-10", end_date="2025-03-10", start_time="25:00")


# --- Pagination ---

def test_list_params_page_of():
    params = ListParams(page=2, limit=10)
    page = params.page_of(["x"], 21)
    assert params.offset == 10
    assert page == {"items": ["x"], "total_count": 21, "current_page": 2, "total_pages": 3}


def test_list_params_liste_vide():
    assert ListParams().page_of([], 0)["total_pages"] == 0


def test_list_params_motif_de_recherche_echappe():
    assert ListParams(search=" Arabe ").search_pattern == "%arabe%"
    assert ListParams(search="100%_a\\b").search_pattern == "%100\\%\\_a\\\\b%"
    assert ListParams().search_pattern is None
