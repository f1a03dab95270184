from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel

from .commodity import Commodity
from .location import Location


class Capacity(BaseModel):
    id: int
    commodity_id: Optional[int] = None
    location_id: Optional[int] = None
    capacity_type: Optional[str] = None
    quantity: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None
    commodity: Optional[Commodity] = None
    location: Optional[Location] = None


class CapacityCreate(BaseModel):
    commodity_id: Optional[int] = None
    location_id: Optional[int] = None
    capacity_type: Optional[str] = None
    quantity: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None


class CapacityUpdate(CapacityCreate):
    pass


class CapacityValidation(BaseModel):
    valid: bool
    errors: List[str] = []
