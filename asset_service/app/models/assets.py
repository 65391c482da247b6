# app/models/assets.py
import uuid
from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.utils.time_helpers import utcnow
from ..enum.asset_management_enum import AssetStatus


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_tag = Column(String(64), unique=True, nullable=False)
    serial_number = Column(String(128), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    category = Column(String(32), nullable=False)
    status = Column(String(24), nullable=False,
                    default=AssetStatus.available.value, index=True)
    location = Column(String(200))
    department = Column(String(120))
    purchase_date = Column(Date)
    warranty_end = Column(Date)
    cost = Column(Numeric(14, 2))
    # Display name of the holder; owner_id links it to a user when known
    current_owner = Column(String(200))
    owner_id = Column(Uuid(as_uuid=True), ForeignKey(
        "users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow,
                        onupdate=utcnow, nullable=False)

    maintenance_records = relationship(
        "MaintenanceRecord", back_populates="asset")
    audit_logs = relationship("AuditLog", back_populates="asset")
