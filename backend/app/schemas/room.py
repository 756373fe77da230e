"""
Schémas Pydantic pour les locaux.
"""

from typing import List, Literal, Optional

from pydantic import field_validator

from app.schemas.common import ApiModel, IntField, OptionalInt, OptionalStr, not_blank

RoomStatus = Literal["available", "occupied", "maintenance", "reserved"]


class RoomCreate(ApiModel):
    name: str
    capacity: IntField
    location: str
    status: RoomStatus = "available"
    current_use: OptionalStr = None
    notes: OptionalStr = None
    school_id: OptionalInt = None

    @field_validator("name", "location")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("capacity")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Capacity must be at least 1")
        return v


class RoomUpdate(ApiModel):
    name: Optional[str] = None
    capacity: OptionalInt = None
    location: Optional[str] = None
    status: Optional[RoomStatus] = None
    current_use: OptionalStr = None
    notes: OptionalStr = None

    @field_validator("name", "location")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return not_blank(v)

    @field_validator("capacity")
    @classmethod
    def positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Capacity must be at least 1")
        return v


class RoomResponse(ApiModel):
    id: int
    school_id: int
    name: str
    capacity: int
    location: str
    status: str
    current_use: Optional[str]
    notes: Optional[str]


class RoomLocations(ApiModel):
    locations: List[str]
