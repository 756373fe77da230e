"""
Tests d'intégration API pour le CRUD des élèves.
POST   /api/students        — création
GET    /api/students        — listage
PUT    /api/students/{id}   — mise à jour
DELETE /api/students/{id}   — suppression
"""

import datetime as dt

import pytest

from app.models.fee import Fee

STUDENT = {
    "studentId": "STU-001",
    "firstName": "Yusuf",
    "lastName": "El Amrani",
    "email": "yusuf@school.nl",
}


@pytest.fixture
def staff(school, login_as):
    return login_as("secretariat", school)


# ============================================================
# POST /api/students
# ============================================================

def test_create_student_succes(client, school, staff):
    """Création valide → 201 avec les données retournées en camelCase."""
    response = client.post("/api/students", json={**STUDENT, "dateOfBirth": "15-03-2012"})

    assert response.status_code == 201
    data = response.json()
    assert data["studentId"] == "STU-001"
    assert data["firstName"] == "Yusuf"
    assert data["dateOfBirth"] == "2012-03-15"
    assert data["status"] == "active"
    assert data["schoolId"] == school.id


def test_create_student_snake_case_accepte(client, staff):
    response = client.post("/api/students", json={
        "student_id": "STU-002", "first_name": "Amina", "last_name": "Bakkali",
    })
    assert response.status_code == 201
    assert response.json()["email"] is None


def test_create_student_email_duplique(client, staff):
    """Même email pour deux élèves → 400 Student email already exists."""
    client.post("/api/students", json=STUDENT)

    response = client.post("/api/students", json={**STUDENT, "studentId": "STU-002", "email": "YUSUF@school.nl"})

    assert response.status_code == 400
    assert response.json() == {"message": "Student email already exists"}


def test_create_student_identifiant_duplique(client, staff):
    client.post("/api/students", json=STUDENT)
    response = client.post("/api/students", json={**STUDENT, "email": "autre@school.nl"})
    assert response.status_code == 400
    assert response.json()["message"] == "Student ID already exists"


def test_create_student_identifiant_duplique_casse_differente(client, staff):
    """Même règle qu'à l'import CSV : STU-001 et stu-001 désignent le même élève."""
    client.post("/api/students", json=STUDENT)
    response = client.post("/api/students", json={**STUDENT, "studentId": "stu-001", "email": "autre@school.nl"})
    assert response.status_code == 400
    assert response.json()["message"] == "Student ID already exists"


def test_create_student_email_invalide(client, staff):
    response = client.post("/api/students", json={**STUDENT, "email": "pas-un-email"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "email"


def test_create_student_date_invalide(client, staff):
    response = client.post("/api/students", json={**STUDENT, "dateOfBirth": "bientôt"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "dateOfBirth"


def test_create_student_prenom_vide(client, staff):
    """Prénom composé d'espaces → 400."""
    response = client.post("/api/students", json={**STUDENT, "firstName": "   "})
    assert response.status_code == 400


def test_enseignant_ne_cree_pas_d_eleve(client, school, login_as):
    login_as("teacher", school)
    assert client.post("/api/students", json=STUDENT).status_code == 403
    assert client.get("/api/students").status_code == 200


# ============================================================
# GET /api/students
# ============================================================

def test_list_students_tri_et_statut(client, staff):
    client.post("/api/students", json={"studentId": "S-1", "firstName": "Omar", "lastName": "Zahir"})
    client.post("/api/students", json={"studentId": "S-2", "firstName": "Aya", "lastName": "Amrani"})
    client.post("/api/students", json={
        "studentId": "S-3", "firstName": "Bilal", "lastName": "Amrani", "status": "graduated",
    })

    data = client.get("/api/students").json()
    assert [s["firstName"] for s in data["items"]] == ["Aya", "Bilal", "Omar"]

    graduated = client.get("/api/students", params={"status": "graduated"}).json()
    assert [s["studentId"] for s in graduated["items"]] == ["S-3"]

    everyone = client.get("/api/students", params={"status": "all"}).json()
    assert everyone["totalCount"] == 3


def test_list_students_recherche_par_identifiant(client, staff):
    client.post("/api/students", json=STUDENT)
    client.post("/api/students", json={"studentId": "STU-777", "firstName": "Aya", "lastName": "Amrani"})

    data = client.get("/api/students", params={"search": "stu-777"}).json()

    assert [s["firstName"] for s in data["items"]] == ["Aya"]


# ============================================================
# PUT /api/students/{id}
# ============================================================

def test_update_student_champ_seul(client, staff):
    """Mise à jour du prénom uniquement → 200, les autres champs inchangés."""
    student_id = client.post("/api/students", json=STUDENT).json()["id"]

    response = client.put(f"/api/students/{student_id}", json={"firstName": "Youssef"})

    assert response.status_code == 200
    data = response.json()
    assert data["firstName"] == "Youssef"
    assert data["lastName"] == "El Amrani"
    assert data["email"] == "yusuf@school.nl"


def test_update_student_email_pris(client, staff):
    client.post("/api/students", json=STUDENT)
    other_id = client.post("/api/students", json={
        **STUDENT, "studentId": "STU-002", "email": "amina@school.nl",
    }).json()["id"]

    response = client.put(f"/api/students/{other_id}", json={"email": "yusuf@school.nl"})

    assert response.status_code == 400
    assert response.json()["message"] == "Student email already exists"


def test_update_student_inexistant(client, staff):
    response = client.put("/api/students/999", json={"firstName": "Test"})
    assert response.status_code == 404
    assert response.json() == {"message": "Student not found"}


# ============================================================
# DELETE /api/students/{id}
# ============================================================

def test_delete_student_succes(client, staff):
    student_id = client.post("/api/students", json=STUDENT).json()["id"]

    response = client.delete(f"/api/students/{student_id}")

    assert response.status_code == 200
    assert response.json() == {"message": "Student deleted"}
    assert client.get(f"/api/students/{student_id}").status_code == 404


def test_delete_student_avec_facture_refuse(client, db, school, staff):
    student_id = client.post("/api/students", json=STUDENT).json()["id"]
    db.add(Fee(school_id=school.id, student_id=student_id, invoice_number="F-1", amount=100, due_date=dt.date(2025, 1, 31)))
    db.commit()

    response = client.delete(f"/api/students/{student_id}")

    assert response.status_code == 400
    assert response.json()["message"] == "Student has dependent records and cannot be deleted (fees)"
