"""
Router pour les élèves.
Listage, consultation, création, mise à jour, suppression
et import CSV (POST /api/students/import).
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import EDUCATORS, STAFF
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound, ValidationFailed
from app.schemas.common import ListParams, Page, list_params
from app.schemas.student import StudentCreate, StudentImportReport, StudentResponse, StudentUpdate
from app.services.student_import import parse_and_import_csv
from app.services.student_service import students

router = APIRouter(prefix="/api/students", tags=["Élèves"])

read_access = scoped(*EDUCATORS)
write_access = scoped(*STAFF)

ALLOWED_CONTENT_TYPES = {"text/csv", "text/plain", "application/vnd.ms-excel"}
MAX_FILE_SIZE_MB = 5


@router.get("", response_model=Page[StudentResponse], summary="Lister les élèves")
def list_students(
    program_id: Optional[int] = Query(None, alias="programId"),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    """Élèves de l'école, triés par nom puis prénom. Recherche sur nom, prénom, ID et email."""
    return students.paginate(db, tenant, params, program_id=program_id)


@router.post("/import", response_model=StudentImportReport, summary="Importer des élèves via CSV")
async def import_students(
    file: UploadFile = File(...),
    school_id: Optional[int] = Query(None, alias="schoolId"),
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    """
    Importe une liste d'élèves depuis un fichier CSV.

    Format attendu du CSV :
    - Colonnes obligatoires : `student_id`, `first_name`, `last_name`
    - Colonnes optionnelles : `email`, `phone`, `program_code`
    - Séparateur : virgule (`,`) ou point-virgule (`;`)
    - Encodage : UTF-8 (avec ou sans BOM)

    Retourne un rapport détaillant les insertions et les rejets.
    """
    filename = file.filename or ""
    if file.content_type not in ALLOWED_CONTENT_TYPES and not filename.lower().endswith(".csv"):
        raise ValidationFailed.field("file", "Only CSV files are accepted")

    content = await file.read()

    if len(content) > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise ValidationFailed.field("file", f"File too large, maximum size is {MAX_FILE_SIZE_MB} MB")

    if not content:
        raise ValidationFailed.field("file", "CSV file is empty")

    return parse_and_import_csv(content, db, tenant, school_id)


@router.get("/{student_id}", response_model=StudentResponse, summary="Détail d'un élève")
def get_student(
    student_id: int,
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    student = students.get(db, tenant, student_id)
    if student is None:
        raise NotFound("Student not found")
    return student


@router.post("", response_model=StudentResponse, status_code=201, summary="Créer un élève")
def create_student(
    data: StudentCreate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    """Crée un élève manuellement (hors import CSV)."""
    return students.create(db, tenant, data)


@router.put("/{student_id}", response_model=StudentResponse, summary="Modifier un élève")
@router.patch("/{student_id}", response_model=StudentResponse, summary="Modifier partiellement un élève")
def update_student(
    student_id: int,
    data: StudentUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    """Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés."""
    student = students.update(db, tenant, student_id, data)
    if student is None:
        raise NotFound("Student not found")
    return student


@router.delete("/{student_id}", summary="Supprimer un élève")
def delete_student(
    student_id: int,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    """Supprime définitivement un élève sans inscriptions, présences, notes ni factures."""
    if not students.delete(db, tenant, student_id):
        raise NotFound("Student not found")
    return {"message": "Student deleted"}
