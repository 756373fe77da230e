"""
Modèle SQLAlchemy pour les écoles (frontière de tenant).
Chaque donnée métier appartient à exactement une école via school_id.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from app.database import Base


class School(Base):
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    code = Column(String(50), unique=True, nullable=False)
    address = Column(String(500), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)

    # Drapeaux fonctionnels par école
    allow_deletion = Column(Boolean, nullable=False, default=True)
    enable_payments = Column(Boolean, nullable=False, default=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
