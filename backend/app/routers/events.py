"""
Router pour le calendrier scolaire.
GET /api/events?from=...&to=... retourne les événements qui chevauchent l'intervalle.
"""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import ALL_ROLES, STAFF
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.event import EventCreate, EventResponse, EventUpdate
from app.services import event_service
from app.services.event_service import events

router = APIRouter(prefix="/api/events", tags=["Calendrier"])

read_access = scoped(*ALL_ROLES)
write_access = scoped(*STAFF)


@router.get("", response_model=Page[EventResponse], summary="Lister les événements")
def list_events(
    date_from: Optional[dt.date] = Query(None, alias="from"),
    date_to: Optional[dt.date] = Query(None, alias="to"),
    event_type: Optional[str] = Query(None, alias="eventType"),
    course_id: Optional[int] = Query(None, alias="courseId"),
    program_id: Optional[int] = Query(None, alias="programId"),
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(read_access),
    db: Session = Depends(get_db),
):
    return event_service.list_events(
        db, tenant, params, date_from, date_to,
        event_type=event_type, course_id=course_id, program_id=program_id,
    )


@router.get("/{event_id}", response_model=EventResponse, summary="Détail d'un événement")
def get_event(event_id: int, tenant: Tenant = Depends(read_access), db: Session = Depends(get_db)):
    event = events.get(db, tenant, event_id)
    if event is None:
        raise NotFound("Event not found")
    return event


@router.post("", response_model=EventResponse, status_code=201, summary="Créer un événement")
def create_event(data: EventCreate, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    return events.create(db, tenant, data)


@router.put("/{event_id}", response_model=EventResponse, summary="Modifier un événement")
@router.patch("/{event_id}", response_model=EventResponse, summary="Modifier partiellement un événement")
def update_event(
    event_id: int,
    data: EventUpdate,
    tenant: Tenant = Depends(write_access),
    db: Session = Depends(get_db),
):
    event = events.update(db, tenant, event_id, data)
    if event is None:
        raise NotFound("Event not found")
    return event


@router.delete("/{event_id}", summary="Supprimer un événement")
def delete_event(event_id: int, tenant: Tenant = Depends(write_access), db: Session = Depends(get_db)):
    if not events.delete(db, tenant, event_id):
        raise NotFound("Event not found")
    return {"message": "Event deleted"}
