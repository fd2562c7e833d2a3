from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator


class WarehouseCreate(BaseModel):
    id: Optional[UUID] = None
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class WarehouseUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class FeatureRef(BaseModel):
    id: UUID
    category: str
    type: str
    name: str

    class Config:
        from_attributes = True


class WarehouseOut(FeatureRef):
    description: Optional[str] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PartyRef(BaseModel):
    id: UUID
    name: str
    email: Optional[str] = None
    mobile: Optional[str] = None

    class Config:
        from_attributes = True
