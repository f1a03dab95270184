from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from .common import blank_to_none, strip_optional, strip_required


# None means the credit status has not been set yet
CreditStatus = Literal["approved", "pending", "rejected"]


class CounterParty(BaseModel):
    id: int
    name: str = ""
    type: Optional[str] = None
    contact_info: Optional[str] = None
    credit_status: Optional[CreditStatus] = None
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None


class CounterPartyCreate(BaseModel):
    name: str
    type: Optional[str] = None
    contact_info: Optional[str] = None
    credit_status: Optional[CreditStatus] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("credit_status", mode="before")
    @classmethod
    def _credit_status(cls, v):
        v = blank_to_none(v)
        return v.strip().lower() if isinstance(v, str) else v


class CounterPartyUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    contact_info: Optional[str] = None
    credit_status: Optional[CreditStatus] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)

    @field_validator("credit_status", mode="before")
    @classmethod
    def _credit_status(cls, v):
        v = blank_to_none(v)
        return v.strip().lower() if isinstance(v, str) else v
