"""
Router pour les locaux.
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
from app.schemas.room import RoomCreate, RoomLocations, RoomResponse, RoomUpdate
from app.services import room_service
from app.services.room_service import rooms

router = APIRouter(prefix="/api/rooms", tags=["Locaux"])

read_access = scoped(*ALL_ROLES)
write_access = scoped(*STAFF)


@router.get("", response_model=Page[RoomResponse], summary="Lister les locaux")
def list_rooms(
    location: Optional[str] = Query(None),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    """Filtres : status, location (exacte), search sur nom, emplacement et notes."""
    return rooms.paginate(db, tenant, params, location=location or None)


@router.get("/locations", response_model=RoomLocations, summary="Emplacements distincts")
def list_locations(tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    return {"locations": room_service.get_locations(db, tenant)}


@router.get("/{room_id}", response_model=RoomResponse, summary="Détail d'un local")
def get_room(room_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    room = rooms.get(db, tenant, room_id)
    if room is None:
        raise NotFound("Room not found")
    return room


@router.post("", response_model=RoomResponse, status_code=201, summary="Créer un local")
def create_room(data: RoomCreate, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    return rooms.create(db, tenant, data)


@router.put("/{room_id}", response_model=RoomResponse, summary="Modifier un local")
@router.patch("/{room_id}", response_model=RoomResponse, summary="Modifier partiellement un local")
def update_room(
    room_id: int,
    data: RoomUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    room = rooms.update(db, tenant, room_id, data)
    if room is None:
        raise NotFound("Room not found")
    return room


@router.delete("/{room_id}", summary="Supprimer un local")
def delete_room(room_id: int, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    if not rooms.delete(db, tenant, room_id):
        raise NotFound("Room not found")
    return {"message": "Room deleted"}
