"""
Service métier pour le calendrier scolaire.
"""

import datetime as dt
from typing import Optional

from sqlalchemy.orm import Session

from app.auth.tenant import Tenant
from app.errors import ValidationFailed
from app.models.event import Event
from app.models.program import Course, Program
from app.schemas.common import ListParams
from app.services.crud import TenantCrud


class EventCrud(TenantCrud):
    def before_update(self, db: Session, obj: Event, values: dict) -> None:
        start = values.get("start_date", obj.start_date)
        end = values.get("end_date", obj.end_date)
        if end < start:
            raise ValidationFailed.field("endDate", "End date cannot be before start date")


events = EventCrud(
    Event,
    "Event",
    search_columns=("title", "description", "location"),
    order_by=("start_date", "start_time"),
    references={
        "program_id": (Program, "Program"),
        "course_id": (Course, "Course"),
    },
)


def list_events(
    db: Session,
    tenant: Tenant,
    params: ListParams,
    date_from: Optional[dt.date] = None,
    date_to: Optional[dt.date] = None,
    **filters,
) -> dict:
    """Événements qui chevauchent l'intervalle [date_from, date_to]."""
    conditions = []
    if date_from is not None:
        conditions.append(Event.end_date >= date_from)
    if date_to is not None:
        conditions.append(Event.start_date <= date_to)
    return events.paginate(db, tenant, params, *conditions, **filters)
