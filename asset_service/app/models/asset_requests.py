import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.utils.time_helpers import utcnow
from ..enum.asset_management_enum import RequestStatus


class AssetRequest(Base):
    __tablename__ = "asset_requests"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    request_no = Column(String(32), unique=True, nullable=False)
    requested_by = Column(Uuid(as_uuid=True), ForeignKey(
        "users.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_name = Column(String(200), nullable=False)
    department = Column(String(120), nullable=False, default="General")
    # Snapshot of the specific asset's category when one was requested
    asset_type = Column(String(32), nullable=False)
    reason = Column(Text, nullable=False)
    specific_asset_id = Column(Uuid(as_uuid=True), ForeignKey(
        "assets.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(16), nullable=False,
                    default=RequestStatus.pending.value)
    decided_by = Column(Uuid(as_uuid=True), ForeignKey(
        "users.id", ondelete="SET NULL"), nullable=True)
    decided_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow,
                        onupdate=utcnow, nullable=False)

    specific_asset = relationship("Asset")
