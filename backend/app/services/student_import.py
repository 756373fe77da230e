"""
Service d'import CSV pour les élèves.
Gère le parsing, la validation, la détection de doublons et l'insertion bulk
dans l'école de l'appelant.

Colonne optionnelle `program_code` : si présente, l'élève est rattaché au
programme de l'école portant ce code (la ligne est rejetée si le code est inconnu).
"""

import csv
import io
import re
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.auth.tenant import Tenant
from app.errors import ValidationFailed
from app.models.program import Program
from app.models.school import School
from app.models.student import Student
from app.schemas.student import ImportError, StudentImportReport, StudentImportRow

# Noms de colonnes normalisés : minuscules, sans espaces, tirets ni underscores
# (student_id, Student ID et studentId désignent la même colonne)
REQUIRED_COLUMNS = {"studentid", "firstname", "lastname"}
OPTIONAL_COLUMNS = {"email", "phone", "programcode"}
EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def _normalize_header(raw: str) -> str:
    return re.sub(r"[\s_\-]", "", raw.strip().lower())


def _detect_separator(sample: str) -> str:
    """Détecte le séparateur CSV (virgule ou point-virgule)."""
    if sample.count(";") > sample.count(","):
        return ";"
    return ","


def _empty_report(reason: str, content: str = "") -> StudentImportReport:
    return StudentImportReport(
        total_rows=0, inserted=0, rejected=0,
        duplicates_in_file=0, duplicates_in_db=0,
        errors=[ImportError(row=0, content=content, reason=reason)],
    )


def _resolve_school(db: Session, tenant: Tenant, school_id: Optional[int]) -> int:
    resolved = tenant.school_for_create(school_id)
    if tenant.is_global and db.get(School, resolved) is None:
        raise ValidationFailed.field("schoolId", "School not found")
    return resolved


def parse_and_import_csv(
    content: bytes, db: Session, tenant: Tenant, school_id: Optional[int] = None
) -> StudentImportReport:
    """
    Parse le CSV, valide chaque ligne, détecte les doublons et insère en bulk.

    Règles :
    - Colonnes requises : student_id, first_name, last_name
    - Colonnes optionnelles : email, phone, program_code
    - Doublon intra-fichier : même student_id ou même email (insensible à la casse)
    - Doublon BDD : idem contre les élèves existants de l'école
    """
    target_school = _resolve_school(db, tenant, school_id)

    try:
        text = content.decode("utf-8-sig")  # utf-8-sig gère le BOM Excel
    except UnicodeDecodeError:
        return _empty_report("File must be UTF-8 encoded")

    lines = text.splitlines()
    separator = _detect_separator(lines[0] if lines else "")
    reader = csv.DictReader(io.StringIO(text), delimiter=separator)

    if reader.fieldnames is None:
        return _empty_report("CSV file is empty or unreadable")

    field_map = {_normalize_header(f): f for f in reader.fieldnames if f}
    missing = REQUIRED_COLUMNS - set(field_map)
    if missing:
        return _empty_report(
            f"Missing columns: {', '.join(sorted(missing))}",
            content=separator.join(reader.fieldnames),
        )

    def cell(row: dict, column: str) -> str:
        if column not in field_map:
            return ""
        return (row.get(field_map[column]) or "").strip()

    program_ids: dict[str, int] = {}
    if "programcode" in field_map:
        program_ids = {
            code.lower(): program_id
            for program_id, code in db.execute(
                select(Program.id, Program.code).where(Program.school_id == target_school)
            ).all()
        }

    valid_rows: list[tuple[int, StudentImportRow]] = []
    errors: list[ImportError] = []
    seen_ids: set[str] = set()
    seen_emails: set[str] = set()
    duplicates_in_file = 0
    total_rows = 0

    for row_num, row in enumerate(reader, start=2):  # ligne 1 = header
        student_id = cell(row, "studentid")
        first_name = cell(row, "firstname")
        last_name = cell(row, "lastname")
        email = cell(row, "email").lower()
        phone = cell(row, "phone")
        program_code = cell(row, "programcode")

        # Ligne vide
        if not any((student_id, first_name, last_name, email, phone, program_code)):
            continue
        total_rows += 1
        summary = ", ".join(v for v in (student_id, last_name, first_name) if v)

        if not student_id or not first_name or not last_name:
            errors.append(ImportError(
                row=row_num, content=summary,
                reason="Student ID, first name and last name are required",
            ))
            continue

        if email and not EMAIL_REGEX.match(email):
            errors.append(ImportError(
                row=row_num, content=f"{summary}, {email}",
                reason=f"Invalid email format: {email}",
            ))
            continue

        if program_code and program_code.lower() not in program_ids:
            errors.append(ImportError(
                row=row_num, content=f"{summary}, {program_code}",
                reason=f"Unknown program code: {program_code}",
            ))
            continue

        if student_id.lower() in seen_ids or (email and email in seen_emails):
            duplicates_in_file += 1
            errors.append(ImportError(
                row=row_num, content=summary,
                reason="Duplicate row in CSV file",
            ))
            continue
        seen_ids.add(student_id.lower())
        if email:
            seen_emails.add(email)

        valid_rows.append((row_num, StudentImportRow(
            student_id=student_id,
            first_name=first_name,
            last_name=last_name,
            email=email or None,
            phone=phone or None,
            program_code=program_code or None,
        )))

    if not valid_rows:
        return StudentImportReport(
            total_rows=total_rows,
            inserted=0,
            rejected=len(errors),
            duplicates_in_file=duplicates_in_file,
            duplicates_in_db=0,
            errors=errors,
        )

    # Détection doublons contre la BDD (une seule requête)
    ids_to_check = [r.student_id.lower() for _, r in valid_rows]
    emails_to_check = [r.email for _, r in valid_rows if r.email]
    existing = db.execute(
        select(func.lower(Student.student_id), func.lower(Student.email)).where(
            Student.school_id == target_school,
            or_(
                func.lower(Student.student_id).in_(ids_to_check),
                func.lower(Student.email).in_(emails_to_check),
            ),
        )
    ).all()
    existing_ids = {row[0] for row in existing}
    existing_emails = {row[1] for row in existing if row[1]}

    to_insert: list[StudentImportRow] = []
    duplicates_in_db = 0

    for row_num, student in valid_rows:
        if student.student_id.lower() in existing_ids or (student.email and student.email in existing_emails):
            duplicates_in_db += 1
            errors.append(ImportError(
                row=row_num,
                content=f"{student.student_id}, {student.last_name}, {student.first_name}",
                reason="Student already exists in this school",
            ))
        else:
            to_insert.append(student)

    if to_insert:
        db.bulk_insert_mappings(Student, [
            {
                "school_id": target_school,
                "student_id": s.student_id,
                "first_name": s.first_name,
                "last_name": s.last_name,
                "email": s.email,
                "phone": s.phone,
                "program_id": program_ids.get(s.program_code.lower()) if s.program_code else None,
                "status": "active",
            }
            for s in to_insert
        ])
        db.commit()

    return StudentImportReport(
        total_rows=total_rows,
        inserted=len(to_insert),
        rejected=len(errors),
        duplicates_in_file=duplicates_in_file,
        duplicates_in_db=duplicates_in_db,
        errors=errors,
    )
