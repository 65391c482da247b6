from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime

from ..enum.asset_management_enum import MaintenancePriority, MaintenanceStatus
from .assets_schemas import AssetBrief


class MaintenanceCreate(BaseModel):
    asset_id: UUID
    issue: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    priority: MaintenancePriority = MaintenancePriority.medium
    assigned_to: Optional[str] = None
    scheduled_date: Optional[date] = None

    model_config = {"str_strip_whitespace": True}


class MaintenanceUpdate(BaseModel):
    # Only fields present in the request body are applied, so cost=0 is writable
    status: Optional[MaintenanceStatus] = None
    cost: Optional[float] = Field(None, ge=0)
    completion_date: Optional[datetime] = None


class MaintenanceOut(BaseModel):
    id: UUID
    asset_id: UUID
    asset: Optional[AssetBrief] = None
    issue: str
    description: Optional[str] = None
    priority: str
    status: str
    assigned_to: Optional[str] = None
    scheduled_date: Optional[date] = None
    completion_date: Optional[datetime] = None
    cost: Optional[float] = None
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MaintenanceListResponse(BaseModel):
    records: List[MaintenanceOut]
    total: int
