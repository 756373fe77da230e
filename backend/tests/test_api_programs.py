"""
Tests d'intégration API pour le catalogue : programmes et cours.
"""

import pytest

from app.models.program import Course, Program

PROGRAM = {"name": "Test", "code": "T-1", "duration": 1, "department": "X"}


@pytest.fixture
def admin(school, login_as):
    return login_as("admin", school)


# ============================================================
# POST /api/programs
# ============================================================

def test_create_program_succes(client, school, admin):
    """Création valide → 201 avec id généré."""
    response = client.post("/api/programs", json=PROGRAM)

    assert response.status_code == 201
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["code"] == "T-1"
    assert data["schoolId"] == school.id
    assert data["isActive"] is True


def test_create_program_code_duplique(client, admin):
    """Deuxième création avec le même code → 400 Program code already exists."""
    assert client.post("/api/programs", json=PROGRAM).status_code == 201

    response = client.post("/api/programs", json=PROGRAM)

    assert response.status_code == 400
    assert response.json() == {"message": "Program code already exists"}


def test_code_unique_par_ecole(client, db, other_school, admin):
    """Le même code peut exister dans une autre école."""
    db.add(Program(school_id=other_school.id, name="Autre", code="T-1", duration=2))
    db.commit()

    assert client.post("/api/programs", json=PROGRAM).status_code == 201


@pytest.mark.parametrize("missing", ["name", "code", "duration"])
def test_create_program_champ_manquant(client, admin, missing):
    """Champ obligatoire absent → 400, le champ est nommé dans errors."""
    body = {k: v for k, v in PROGRAM.items() if k != missing}

    response = client.post("/api/programs", json=body)

    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Validation error"
    assert missing in [e["path"] for e in data["errors"]]


def test_create_program_duree_en_texte(client, admin):
    response = client.post("/api/programs", json={**PROGRAM, "duration": " 4 "})
    assert response.status_code == 201
    assert response.json()["duration"] == 4


# ============================================================
# GET /api/programs
# ============================================================

def test_list_programs_pagination_et_recherche(client, admin):
    for i, name in enumerate(["Arabe", "Coran", "Fiqh", "Arabe avancé"]):
        client.post("/api/programs", json={"name": name, "code": f"P-{i}", "duration": 1})

    page = client.get("/api/programs", params={"limit": 3, "page": 2}).json()
    assert page["totalCount"] == 4
    assert page["totalPages"] == 2
    assert page["currentPage"] == 2
    assert [p["name"] for p in page["items"]] == ["Fiqh"]

    found = client.get("/api/programs", params={"search": "arabe"}).json()
    assert [p["name"] for p in found["items"]] == ["Arabe", "Arabe avancé"]


@pytest.mark.parametrize("term, expected", [("%", ["Tajwid 100%"]), ("_", ["Hifz_1"]), ("x", [])])
def test_recherche_caracteres_joker_litteraux(client, admin, term, expected):
    """% et _ saisis dans la recherche ne sont pas des jokers."""
    for i, name in enumerate(["Tajwid 100%", "Hifz_1", "Fiqh"]):
        client.post("/api/programs", json={"name": name, "code": f"P-{i}", "duration": 1})

    found = client.get("/api/programs", params={"search": term}).json()

    assert [p["name"] for p in found["items"]] == expected


def test_list_programs_limite_invalide(client, admin):
    response = client.get("/api/programs", params={"limit": 0})
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "limit"


# ============================================================
# PUT/PATCH/GET /api/programs/{id}
# ============================================================

def test_update_puis_get_fusionne(client, admin):
    """update(create(X)) puis get → union de X et de la mise à jour."""
    program_id = client.post("/api/programs", json=PROGRAM).json()["id"]

    response = client.patch(f"/api/programs/{program_id}", json={"department": "Sciences islamiques"})
    assert response.status_code == 200

    data = client.get(f"/api/programs/{program_id}").json()
    assert data["department"] == "Sciences islamiques"
    assert data["name"] == "Test"
    assert data["code"] == "T-1"
    assert data["duration"] == 1


def test_update_code_vers_code_existant(client, admin):
    client.post("/api/programs", json=PROGRAM)
    other_id = client.post("/api/programs", json={**PROGRAM, "code": "T-2"}).json()["id"]

    response = client.put(f"/api/programs/{other_id}", json={"code": "T-1"})

    assert response.status_code == 400
    assert response.json()["message"] == "Program code already exists"


def test_update_meme_code_accepte(client, admin):
    """Renvoyer son propre code n'est pas un doublon."""
    program_id = client.post("/api/programs", json=PROGRAM).json()["id"]
    assert client.put(f"/api/programs/{program_id}", json={"code": "T-1", "name": "Renommé"}).status_code == 200


def test_update_null_sur_champ_obligatoire(client, admin):
    program_id = client.post("/api/programs", json=PROGRAM).json()["id"]
    response = client.patch(f"/api/programs/{program_id}", json={"name": None})
    assert response.status_code == 400
    assert response.json()["errors"] == [{"path": "name", "message": "Field cannot be null"}]


def test_get_program_inexistant(client, admin):
    response = client.get("/api/programs/999")
    assert response.status_code == 404
    assert response.json() == {"message": "Program not found"}


# ============================================================
# DELETE /api/programs/{id}
# ============================================================

def test_delete_deux_fois(client, admin):
    """Premier delete → 200, second → 404."""
    program_id = client.post("/api/programs", json=PROGRAM).json()["id"]

    first = client.delete(f"/api/programs/{program_id}")
    assert first.status_code == 200
    assert first.json() == {"message": "Program deleted"}

    assert client.delete(f"/api/programs/{program_id}").status_code == 404


def test_delete_avec_cours_refuse(client, db, school, admin):
    program_id = client.post("/api/programs", json=PROGRAM).json()["id"]
    db.add(Course(school_id=school.id, name="Arabe 1", code="AR1", capacity=10, program_id=program_id))
    db.commit()

    response = client.delete(f"/api/programs/{program_id}")

    assert response.status_code == 400
    assert response.json()["message"] == "Program has dependent records and cannot be deleted (courses)"
    assert db.get(Program, program_id) is not None


def test_delete_desactive_pour_l_ecole(client, db, school, admin):
    program_id = client.post("/api/programs", json=PROGRAM).json()["id"]
    school.allow_deletion = False
    db.commit()

    response = client.delete(f"/api/programs/{program_id}")

    assert response.status_code == 403
    assert response.json() == {"message": "Deletion is disabled for this school"}


def test_superadmin_ignore_allow_deletion(client, db, make_school, login_as):
    locked = make_school(allow_deletion=False)
    program = Program(school_id=locked.id, name="Verrouillé", code="L-1", duration=1)
    db.add(program)
    db.commit()
    login_as("superadmin")

    assert client.delete(f"/api/programs/{program.id}").status_code == 200


# ============================================================
# /api/courses
# ============================================================

def test_create_course_programme_autre_ecole(client, db, other_school, admin):
    """Un programId d'une autre école → 400 sur le champ programId."""
    foreign = Program(school_id=other_school.id, name="Autre", code="O-1", duration=1)
    db.add(foreign)
    db.commit()

    response = client.post("/api/courses", json={
        "name": "Arabe 1", "code": "AR1", "capacity": 20, "programId": foreign.id,
    })

    assert response.status_code == 400
    assert response.json()["errors"] == [{"path": "programId", "message": "Program not found"}]


def test_create_course_code_duplique(client, admin):
    body = {"name": "Arabe 1", "code": "AR1", "capacity": 20}
    assert client.post("/api/courses", json=body).status_code == 201
    response = client.post("/api/courses", json=body)
    assert response.status_code == 400
    assert response.json()["message"] == "Course code already exists"


def test_list_courses_filtre_programme(client, admin):
    program_id = client.post("/api/programs", json=PROGRAM).json()["id"]
    client.post("/api/courses", json={"name": "Arabe 1", "code": "AR1", "capacity": 20, "programId": program_id})
    client.post("/api/courses", json={"name": "Fiqh 1", "code": "FQ1", "capacity": 20})

    data = client.get("/api/courses", params={"programId": program_id}).json()

    assert [c["code"] for c in data["items"]] == ["AR1"]


def test_update_course_capacite_sous_inscrits(client, db, school, admin):
    course = Course(school_id=school.id, name="Arabe 1", code="AR1", capacity=10, enrolled=5)
    db.add(course)
    db.commit()

    response = client.patch(f"/api/courses/{course.id}", json={"capacity": 4})

    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "capacity"
