"""
Service métier pour les locaux.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.tenant import Tenant
from app.models.room import Room
from app.services.crud import TenantCrud

rooms = TenantCrud(
    Room,
    "Room",
    search_columns=("name", "location", "current_use", "notes"),
    order_by=("name",),
    unique_fields={"name": "name"},
)


def get_locations(db: Session, tenant: Tenant) -> list[str]:
    """Emplacements distincts des locaux de l'appelant, triés."""
    stmt = tenant.apply(select(Room.location).distinct(), Room)
    return sorted(db.execute(stmt).scalars().all())
