from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import strip_optional, strip_required


class Blend(BaseModel):
    id: int
    name: str = ""
    description: Optional[str] = None
    commodity_id: Optional[int] = None
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None


class BlendCreate(BaseModel):
    name: str
    description: Optional[str] = None
    commodity_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class BlendUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    commodity_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


# Component line of a blend created together with its components
class BlendComponentInput(BaseModel):
    component_commodity_id: int
    percentage: float = Field(ge=0, le=100)


class BlendWithComponentsCreate(BlendCreate):
    components: List[BlendComponentInput] = []


class BlendProportion(BaseModel):
    valid: bool
    total: float
    message: str
