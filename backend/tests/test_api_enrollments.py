"""
Tests d'intégration API pour les inscriptions élève ↔ cours.
Vérifie la capacité des cours et le compteur courses.enrolled.
"""

import pytest

from app.models.program import Course
from app.models.student import Student


# --- Helpers ---

def add_course(db, school, capacity=2, enrolled=0, code="AR1") -> Course:
    course = Course(school_id=school.id, name=f"Cours {code}", code=code, capacity=capacity, enrolled=enrolled)
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


def add_student(db, school, student_id="STU-001") -> Student:
    student = Student(school_id=school.id, student_id=student_id, first_name="Yusuf", last_name="El Amrani")
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


def enrolled_count(db, course_id) -> int:
    db.expire_all()
    return db.get(Course, course_id).enrolled


@pytest.fixture
def staff(school, login_as):
    return login_as("secretariat", school)


# ============================================================
# POST /api/enrollments
# ============================================================

def test_inscription_incremente_le_compteur(client, db, school, staff):
    course = add_course(db, school)
    student = add_student(db, school)

    response = client.post("/api/enrollments", json={"studentId": student.id, "courseId": course.id})

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "active"
    assert data["enrollmentDate"] is not None
    assert enrolled_count(db, course.id) == 1


def test_cours_complet(client, db, school, staff):
    """enrolled == capacity → 400 Course is at maximum capacity."""
    course = add_course(db, school, capacity=3, enrolled=3)
    student = add_student(db, school)

    response = client.post("/api/enrollments", json={"studentId": student.id, "courseId": course.id})

    assert response.status_code == 400
    assert response.json() == {"message": "Course is at maximum capacity"}
    assert enrolled_count(db, course.id) == 3


def test_inscription_en_double(client, db, school, staff):
    course = add_course(db, school, capacity=5)
    student = add_student(db, school)
    body = {"studentId": student.id, "courseId": course.id}
    assert client.post("/api/enrollments", json=body).status_code == 201

    response = client.post("/api/enrollments", json=body)

    assert response.status_code == 400
    assert response.json()["message"] == "Student is already enrolled in this course"
    assert enrolled_count(db, course.id) == 1


def test_inscription_completed_ne_prend_pas_de_place(client, db, school, staff):
    course = add_course(db, school, capacity=1, enrolled=1)
    student = add_student(db, school)

    response = client.post("/api/enrollments", json={
        "studentId": student.id, "courseId": course.id, "status": "completed", "finalScore": "88",
    })

    assert response.status_code == 201
    assert response.json()["finalScore"] == 88
    assert enrolled_count(db, course.id) == 1


def test_inscription_eleve_autre_ecole(client, db, school, other_school, staff):
    course = add_course(db, school)
    foreign = add_student(db, other_school)

    response = client.post("/api/enrollments", json={"studentId": foreign.id, "courseId": course.id})

    assert response.status_code == 400
    assert response.json()["errors"] == [{"path": "studentId", "message": "Student not found"}]


def test_inscription_champs_manquants(client, staff):
    response = client.post("/api/enrollments", json={})
    assert response.status_code == 400
    assert {e["path"] for e in response.json()["errors"]} == {"studentId", "courseId"}


# ============================================================
# PATCH / DELETE /api/enrollments/{id}
# ============================================================

def test_abandon_libere_la_place(client, db, school, staff):
    course = add_course(db, school, capacity=1)
    first = add_student(db, school, "STU-001")
    second = add_student(db, school, "STU-002")
    enrollment_id = client.post("/api/enrollments", json={"studentId": first.id, "courseId": course.id}).json()["id"]

    assert client.post("/api/enrollments", json={"studentId": second.id, "courseId": course.id}).status_code == 400

    assert client.patch(f"/api/enrollments/{enrollment_id}", json={"status": "dropped"}).status_code == 200
    assert enrolled_count(db, course.id) == 0

    assert client.post("/api/enrollments", json={"studentId": second.id, "courseId": course.id}).status_code == 201
    assert enrolled_count(db, course.id) == 1


def test_reactivation_verifie_la_capacite(client, db, school, staff):
    course = add_course(db, school, capacity=1)
    first = add_student(db, school, "STU-001")
    second = add_student(db, school, "STU-002")
    dropped_id = client.post("/api/enrollments", json={
        "studentId": first.id, "courseId": course.id, "status": "dropped",
    }).json()["id"]
    client.post("/api/enrollments", json={"studentId": second.id, "courseId": course.id})

    response = client.patch(f"/api/enrollments/{dropped_id}", json={"status": "active"})

    assert response.status_code == 400
    assert response.json()["message"] == "Course is at maximum capacity"


def test_suppression_decremente(client, db, school, staff):
    course = add_course(db, school)
    student = add_student(db, school)
    enrollment_id = client.post("/api/enrollments", json={"studentId": student.id, "courseId": course.id}).json()["id"]

    response = client.delete(f"/api/enrollments/{enrollment_id}")

    assert response.status_code == 200
    assert response.json() == {"message": "Enrollment deleted"}
    assert enrolled_count(db, course.id) == 0


def test_score_final_hors_bornes(client, db, school, staff):
    course = add_course(db, school)
    student = add_student(db, school)
    enrollment_id = client.post("/api/enrollments", json={"studentId": student.id, "courseId": course.id}).json()["id"]

    response = client.patch(f"/api/enrollments/{enrollment_id}", json={"finalScore": 120})

    assert response.status_code == 400
    assert response.json()["errors"][0]["path"] == "finalScore"


def test_liste_filtree_par_eleve(client, db, school, staff):
    course = add_course(db, school, capacity=5)
    other_course = add_course(db, school, capacity=5, code="FQ1")
    first = add_student(db, school, "STU-001")
    second = add_student(db, school, "STU-002")
    client.post("/api/enrollments", json={"studentId": first.id, "courseId": course.id})
    client.post("/api/enrollments", json={"studentId": second.id, "courseId": other_course.id})

    data = client.get("/api/enrollments", params={"studentId": first.id}).json()

    assert data["totalCount"] == 1
    assert data["items"][0]["courseId"] == course.id
