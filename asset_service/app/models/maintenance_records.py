import uuid
from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.utils.time_helpers import utcnow
from ..enum.asset_management_enum import MaintenancePriority, MaintenanceStatus


class MaintenanceRecord(Base):
    __tablename__ = "maintenance_records"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(Uuid(as_uuid=True), ForeignKey(
        "assets.id", ondelete="CASCADE"), nullable=False, index=True)
    issue = Column(String(255), nullable=False)
    description = Column(Text)
    priority = Column(String(16), nullable=False,
                      default=MaintenancePriority.medium.value)
    status = Column(String(24), nullable=False,
                    default=MaintenanceStatus.scheduled.value)
    assigned_to = Column(String(200))
    scheduled_date = Column(Date)
    completion_date = Column(DateTime(timezone=True))
    cost = Column(Numeric(14, 2))
    created_by = Column(Uuid(as_uuid=True), ForeignKey(
        "users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow,
                        onupdate=utcnow, nullable=False)

    asset = relationship("Asset", back_populates="maintenance_records")
