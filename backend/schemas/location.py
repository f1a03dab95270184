from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from .common import strip_optional, strip_required
from .counter_party import CounterParty


class Location(BaseModel):
    id: int
    name: str = ""
    location_type: Optional[str] = None
    address: Optional[str] = None
    counterparty_id: Optional[int] = None
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None


class LocationCreate(BaseModel):
    name: str
    location_type: Optional[str] = None
    address: Optional[str] = None
    counterparty_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class LocationUpdate(BaseModel):
    name: Optional[str] = None
    location_type: Optional[str] = None
    address: Optional[str] = None
    counterparty_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


class LocationDetail(BaseModel):
    """A location with its counter party resolved against live data"""
    location: Location
    counterparty: Optional[CounterParty] = None
