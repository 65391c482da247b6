import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.utils.time_helpers import utcnow


class AuditLog(Base):
    """Append-only observation of an asset; never mutates the asset itself."""
    __tablename__ = "audit_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(Uuid(as_uuid=True), ForeignKey(
        "assets.id", ondelete="CASCADE"), nullable=False, index=True)
    performed_by = Column(Uuid(as_uuid=True), ForeignKey(
        "users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(32), nullable=False)
    status = Column(String(32), nullable=False)
    location = Column(String(200))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    asset = relationship("Asset", back_populates="audit_logs")
    performer = relationship("Users")
