from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from .common import strip_optional, strip_required


class UOM(BaseModel):
    id: int
    name: str = ""
    description: Optional[str] = None
    type: Optional[str] = None
    base_uom: Optional[float] = None
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None


class UOMRef(BaseModel):
    """Snapshot of a UOM embedded in a commodity"""
    id: int
    name: str


class UOMCreate(BaseModel):
    name: str
    description: Optional[str] = None
    type: Optional[str] = None
    base_uom: Optional[float] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class UOMUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    base_uom: Optional[float] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)
