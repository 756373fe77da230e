"""
Tests d'intégration API pour le tableau de bord.
"""

import datetime as dt

from app.models.attendance import Attendance
from app.models.program import Course, Program
from app.models.student import Student
from app.models.teacher import Teacher


def seed_school(db, school, prefix="A"):
    program = Program(school_id=school.id, name="Hifz", code=f"{prefix}-HFZ", duration=3)
    teacher = Teacher(school_id=school.id, teacher_id=f"{prefix}-T1", first_name="Khadija", last_name="Ouali")
    active_course = Course(school_id=school.id, name="Tajwid", code=f"{prefix}-TJ", capacity=10)
    closed_course = Course(school_id=school.id, name="Ancien", code=f"{prefix}-OLD", capacity=10, is_active=False)
    students = [
        Student(school_id=school.id, student_id=f"{prefix}-S{i}", first_name="Eleve", last_name=str(i))
        for i in range(3)
    ]
    db.add_all([program, teacher, active_course, closed_course, *students])
    db.commit()

    day = dt.date(2025, 10, 6)
    for student, status in zip(students, ["present", "late", "absent"]):
        db.add(Attendance(
            school_id=school.id, student_id=student.id, course_id=active_course.id, date=day, status=status,
        ))
    db.commit()


def test_stats_ecole(client, db, school, other_school, login_as):
    seed_school(db, school, "A")
    seed_school(db, other_school, "B")
    login_as("teacher", school)

    response = client.get("/api/dashboard/stats")

    assert response.status_code == 200
    assert response.json() == {
        "totalStudents": 3,
        "activeCourses": 1,
        "totalPrograms": 1,
        "totalTeachers": 1,
        "attendanceRate": 66.7,
    }


def test_stats_sans_donnees(client, school, login_as):
    login_as("guardian", school)
    data = client.get("/api/dashboard/stats").json()
    assert data["totalStudents"] == 0
    assert data["attendanceRate"] == 0


def test_stats_superadmin_toutes_ecoles(client, db, school, other_school, login_as):
    seed_school(db, school, "A")
    seed_school(db, other_school, "B")
    login_as("superadmin")

    assert client.get("/api/dashboard/stats").json()["totalStudents"] == 6
    filtered = client.get("/api/dashboard/stats", params={"schoolId": school.id}).json()
    assert filtered["totalStudents"] == 3
