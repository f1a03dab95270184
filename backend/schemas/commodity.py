from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from .common import strip_optional, strip_required
from .uom import UOMRef


class Commodity(BaseModel):
    id: int
    name: str = ""
    description: Optional[str] = None
    uom_id: Optional[int] = None
    density: Optional[float] = None
    energy_uom: Optional[str] = None
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None
    uom: Optional[UOMRef] = None


class CommodityCreate(BaseModel):
    name: str
    description: Optional[str] = None
    uom_id: Optional[int] = None
    density: Optional[float] = None
    energy_uom: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class CommodityUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    uom_id: Optional[int] = None
    density: Optional[float] = None
    energy_uom: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)
