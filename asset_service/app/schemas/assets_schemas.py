# app/schemas/assets_schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime

from shared.core.schemas import CommonQueryParams
from ..enum.asset_management_enum import AssetCategory, AssetStatus


class AssetBase(BaseModel):
    asset_tag: str = Field(..., min_length=1, max_length=64)
    serial_number: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=200)
    category: AssetCategory
    status: AssetStatus
    location: Optional[str] = None
    department: Optional[str] = None
    purchase_date: Optional[date] = None
    warranty_end: Optional[date] = None
    cost: Optional[float] = Field(None, ge=0)
    current_owner: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class AssetCreate(AssetBase):
    pass


class AssetOut(BaseModel):
    id: UUID
    asset_tag: str
    serial_number: str
    name: str
    category: str
    status: str
    location: Optional[str] = None
    department: Optional[str] = None
    purchase_date: Optional[date] = None
    warranty_end: Optional[date] = None
    cost: Optional[float] = None
    current_owner: Optional[str] = None
    owner_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AvailableAssetOut(BaseModel):
    id: UUID
    asset_tag: str
    name: str
    serial_number: str

    model_config = {"from_attributes": True}


class AssetBrief(BaseModel):
    id: UUID
    asset_tag: str
    name: str
    serial_number: str
    location: Optional[str] = None

    model_config = {"from_attributes": True}


class AssetsRequest(CommonQueryParams):
    status: Optional[str] = None
    category: Optional[str] = None


class AssetsResponse(BaseModel):
    # Items are role-projected dicts; employees do not receive cost/purchase_date
    assets: List[dict]
    total: int
