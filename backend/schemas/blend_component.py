from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .blend import Blend, BlendProportion
from .commodity import Commodity


class BlendComponent(BaseModel):
    id: int
    blend_id: int = 0
    component_commodity_id: int = 0
    percentage: float = 0
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None
    commodity: Optional[Commodity] = None
    blend: Optional[Blend] = None


class BlendComponentCreate(BaseModel):
    blend_id: int
    component_commodity_id: int
    percentage: float = Field(ge=0, le=100)
    is_active: Optional[bool] = None


class BlendComponentUpdate(BaseModel):
    blend_id: Optional[int] = None
    component_commodity_id: Optional[int] = None
    percentage: Optional[float] = Field(default=None, ge=0, le=100)
    is_active: Optional[bool] = None


class BlendDetail(BaseModel):
    """A blend with its commodity and components resolved against live data"""
    blend: Blend
    commodity: Optional[Commodity] = None
    components: List[BlendComponent]
    proportion: BlendProportion
