from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from ..enum.asset_management_enum import AuditAction, AuditStatus


class AuditCreate(BaseModel):
    asset_id: UUID
    action: AuditAction
    status: AuditStatus
    location: Optional[str] = None
    notes: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class AuditAssetOut(BaseModel):
    id: UUID
    asset_tag: str
    name: str
    serial_number: str

    model_config = {"from_attributes": True}


class AuditPerformerOut(BaseModel):
    id: UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class AuditOut(BaseModel):
    id: UUID
    asset_id: UUID
    asset: Optional[AuditAssetOut] = None
    performed_by: Optional[UUID] = None
    performer: Optional[AuditPerformerOut] = None
    action: str
    status: str
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AuditListResponse(BaseModel):
    logs: List[AuditOut]
    total: int
