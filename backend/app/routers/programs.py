"""
Router du catalogue : programmes (/api/programs) et cours (/api/courses).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import ALL_ROLES, STAFF
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.program import (
    CourseCreate,
    CourseResponse,
    CourseUpdate,
    ProgramCreate,
    ProgramResponse,
    ProgramUpdate,
)
from app.services.program_service import courses, programs

router = APIRouter(prefix="/api/programs", tags=["Programmes"])
courses_router = APIRouter(prefix="/api/courses", tags=["Cours"])

read_access = scoped(*ALL_ROLES)
write_access = scoped(*STAFF)


@router.get("", response_model=Page[ProgramResponse], summary="Lister les programmes")
def list_programs(
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    return programs.paginate(db, tenant, params)


@router.get("/{program_id}", response_model=ProgramResponse, summary="Détail d'un programme")
def get_program(program_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    program = programs.get(db, tenant, program_id)
    if program is None:
        raise NotFound("Program not found")
    return program


@router.post("", response_model=ProgramResponse, status_code=201, summary="Créer un programme")
def create_program(data: ProgramCreate, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    """Le code du programme est unique au sein de l'école."""
    return programs.create(db, tenant, data)


@router.put("/{program_id}", response_model=ProgramResponse, summary="Modifier un programme")
@router.patch("/{program_id}", response_model=ProgramResponse, summary="Modifier partiellement un programme")
def update_program(
    program_id: int,
    data: ProgramUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    program = programs.update(db, tenant, program_id, data)
    if program is None:
        raise NotFound("Program not found")
    return program


@router.delete("/{program_id}", summary="Supprimer un programme")
def delete_program(program_id: int, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    if not programs.delete(db, tenant, program_id):
        raise NotFound("Program not found")
    return {"message": "Program deleted"}


# --- Cours ---

@courses_router.get("", response_model=Page[CourseResponse], summary="Lister les cours")
def list_courses(
    program_id: Optional[int] = Query(None, alias="programId"),
    teacher_id: Optional[int] = Query(None, alias="teacherId"),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    return courses.paginate(db, tenant, params, program_id=program_id, teacher_id=teacher_id)


@courses_router.get("/{course_id}", response_model=CourseResponse, summary="Détail d'un cours")
def get_course(course_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    course = courses.get(db, tenant, course_id)
    if course is None:
        raise NotFound("Course not found")
    return course


@courses_router.post("", response_model=CourseResponse, status_code=201, summary="Créer un cours")
def create_course(data: CourseCreate, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    return courses.create(db, tenant, data)


@courses_router.put("/{course_id}", response_model=CourseResponse, summary="Modifier un cours")
@courses_router.patch("/{course_id}", response_model=CourseResponse, summary="Modifier partiellement un cours")
def update_course(
    course_id: int,
    data: CourseUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    course = courses.update(db, tenant, course_id, data)
    if course is None:
        raise NotFound("Course not found")
    return course


@courses_router.delete("/{course_id}", summary="Supprimer un cours")
def delete_course(course_id: int, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    if not courses.delete(db, tenant, course_id):
        raise NotFound("Course not found")
    return {"message": "Course deleted"}
