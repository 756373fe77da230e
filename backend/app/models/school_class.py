"""
Modèles SQLAlchemy pour les groupes d'élèves (classes) et leurs inscriptions.
Nommé school_class pour éviter le conflit avec le mot-clé Python 'class'.
"""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from app.database import Base


class StudentGroup(Base):
    __tablename__ = "student_groups"
    __table_args__ = (
        UniqueConstraint("school_id", "name", name="uq_student_groups_school_name"),
    )

    id = Column(Integer, primary_key=True)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    academic_year = Column(String(20), nullable=True)
    program_id = Column(Integer, ForeignKey("programs.id"), nullable=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=True)
    max_capacity = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class StudentGroupEnrollment(Base):
    """Association groupe ↔ élèves."""
    __tablename__ = "student_group_enrollments"
    __table_args__ = (
        UniqueConstraint("student_id", "group_id", name="uq_group_enrollments_pair"),
    )

    id = Column(Integer, primary_key=True)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    group_id = Column(Integer, ForeignKey("student_groups.id"), nullable=False)
    enrollment_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, server_default=func.now())
