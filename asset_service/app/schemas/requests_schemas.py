from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import datetime


class AssetRequestCreate(BaseModel):
    # Exactly one of asset_type / specific_asset_id is expected
    asset_type: Optional[str] = None
    specific_asset_id: Optional[UUID] = None
    reason: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class RequestStatusUpdate(BaseModel):
    status: Optional[str] = None


class AssetRequestOut(BaseModel):
    id: UUID
    request_no: str
    requested_by: UUID
    employee_name: str
    department: str
    asset_type: str
    reason: str
    specific_asset_id: Optional[UUID] = None
    status: str
    decided_by: Optional[UUID] = None
    decided_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AssetRequestListResponse(BaseModel):
    requests: List[AssetRequestOut]
    total: int
