from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from schemas.features import FeatureRef, PartyRef


AdjustmentType = Literal["Addition", "Deduction"]


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

class ItemCreate(BaseModel):
    id: Optional[UUID] = None
    type: Optional[str] = None
    code: Optional[str] = None
    name: str
    description: Optional[str] = None
    uom: Optional[str] = None
    min_stock_allowed: Optional[float] = Field(None, ge=0)
    max_stock_allowed: Optional[float] = Field(None, ge=0)
    icon: Optional[str] = None
    expirable: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class ItemUpdate(BaseModel):
    type: Optional[str] = None
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    uom: Optional[str] = None
    min_stock_allowed: Optional[float] = Field(None, ge=0)
    max_stock_allowed: Optional[float] = Field(None, ge=0)
    icon: Optional[str] = None
    expirable: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v


class ItemRef(BaseModel):
    id: UUID
    type: str
    code: str
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None

    class Config:
        from_attributes = True


class ItemOut(ItemRef):
    description: Optional[str] = None
    uom: str
    min_stock_allowed: float
    max_stock_allowed: float
    expirable: bool
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Stocks
# ---------------------------------------------------------------------------

class StockCreate(BaseModel):
    id: Optional[UUID] = None
    store_id: UUID
    owner_id: UUID
    item_id: UUID
    # accepted for schema compatibility, dropped by the router
    quantity: Optional[float] = Field(None, ge=0)
    min_allowed: Optional[float] = Field(None, ge=0)
    max_allowed: Optional[float] = Field(None, ge=0)


class StockUpdate(BaseModel):
    store_id: Optional[UUID] = None
    owner_id: Optional[UUID] = None
    item_id: Optional[UUID] = None
    quantity: Optional[float] = Field(None, ge=0)
    min_allowed: Optional[float] = Field(None, ge=0)
    max_allowed: Optional[float] = Field(None, ge=0)


class StockRef(BaseModel):
    id: UUID
    store_id: UUID
    owner_id: UUID
    item_id: UUID
    quantity: float

    class Config:
        from_attributes = True


class StockOut(StockRef):
    min_allowed: float
    max_allowed: float
    store: Optional[FeatureRef] = None
    owner: Optional[PartyRef] = None
    item: Optional[ItemRef] = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Adjustments
# ---------------------------------------------------------------------------

class AdjustmentCreate(BaseModel):
    id: Optional[UUID] = None
    type: AdjustmentType
    reason: str
    stock_id: UUID
    party_id: UUID
    # default to the stock's
    item_id: Optional[UUID] = None
    store_id: Optional[UUID] = None
    quantity: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    remarks: str
    expired_at: Optional[datetime] = None

    @field_validator("reason", "remarks")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class AdjustmentUpdate(BaseModel):
    type: Optional[AdjustmentType] = None
    reason: Optional[str] = None
    stock_id: Optional[UUID] = None
    party_id: Optional[UUID] = None
    item_id: Optional[UUID] = None
    store_id: Optional[UUID] = None
    quantity: Optional[float] = Field(None, ge=0)
    cost: Optional[float] = Field(None, ge=0)
    remarks: Optional[str] = None
    expired_at: Optional[datetime] = None


class AdjustmentOut(BaseModel):
    id: UUID
    type: str
    reason: str
    item_id: UUID
    stock_id: UUID
    store_id: UUID
    party_id: UUID
    quantity: float
    cost: float
    remarks: str
    expired_at: Optional[datetime] = None
    item: Optional[ItemRef] = None
    stock: Optional[StockRef] = None
    store: Optional[FeatureRef] = None
    party: Optional[PartyRef] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
