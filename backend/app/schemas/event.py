"""
Schémas Pydantic pour les événements du calendrier.
"""

import datetime as dt
import re
from typing import Optional

from pydantic import field_validator, model_validator

from app.schemas.common import ApiModel, DateField, OptionalDate, OptionalInt, OptionalStr, not_blank

TIME_REGEX = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_time(v: Optional[str]) -> Optional[str]:
    if v is not None and not TIME_REGEX.match(v):
        raise ValueError("Time must use the HH:MM format")
    return v


class EventCreate(ApiModel):
    title: str
    description: OptionalStr = None
    start_date: DateField
    end_date: DateField
    start_time: OptionalStr = None
    end_time: OptionalStr = None
    location: OptionalStr = None
    event_type: str = "academic"
    is_all_day: bool = False
    program_id: OptionalInt = None
    course_id: OptionalInt = None
    school_id: OptionalInt = None

    @field_validator("title", "event_type")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: Optional[str]) -> Optional[str]:
        return _check_time(v)

    @model_validator(mode="after")
    def chronological(self):
        if self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class EventUpdate(ApiModel):
    title: Optional[str] = None
    description: OptionalStr = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    start_time: OptionalStr = None
    end_time: OptionalStr = None
    location: OptionalStr = None
    event_type: Optional[str] = None
    is_all_day: Optional[bool] = None
    program_id: OptionalInt = None
    course_id: OptionalInt = None

    @field_validator("title", "event_type")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: Optional[str]) -> Optional[str]:
        return _check_time(v)


class EventResponse(ApiModel):
    id: int
    school_id: int
    title: str
    description: Optional[str]
    start_date: dt.date
    end_date: dt.date
    start_time: Optional[str]
    end_time: Optional[str]
    location: Optional[str]
    event_type: str
    is_all_day: bool
    program_id: Optional[int]
    course_id: Optional[int]
