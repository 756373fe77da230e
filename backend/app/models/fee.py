"""
Modèles SQLAlchemy pour la facturation : frais (factures) et paiements.
Le statut est posé directement par le handler concerné, sans machine à états.
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint, func

from app.database import Base


class Fee(Base):
    __tablename__ = "fees"
    __table_args__ = (
        UniqueConstraint("school_id", "invoice_number", name="uq_fees_school_invoice"),
    )

    id = Column(Integer, primary_key=True)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    invoice_number = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="open")  # open, paid, overdue, cancelled
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=False, index=True)
    fee_id = Column(Integer, ForeignKey("fees.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_date = Column(Date, nullable=False)
    method = Column(String(30), nullable=False, default="bank_transfer")  # cash, bank_transfer, card, ideal
    reference = Column(String(100), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
