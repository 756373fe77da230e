"""
Router du tableau de bord.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import ALL_ROLES
from app.auth.tenant import Tenant
from app.database import get_db
from app.schemas.dashboard import DashboardStats
from app.services import dashboard_service

router = APIRouter(prefix="/api/dashboard", tags=["Tableau de bord"])


@router.get("/stats", response_model=DashboardStats, summary="Statistiques du tableau de bord")
def get_stats(
    school_id: Optional[int] = Query(None, alias="schoolId"),
    tenant: Tenant = Depends(scoped(*ALL_ROLES)),
    db: Session = Depends(get_db),
):
    """Compteurs de l'école de l'appelant (toutes les écoles pour le superadmin, sauf filtre schoolId)."""
    return dashboard_service.get_stats(db, tenant, school_id)
