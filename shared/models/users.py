import uuid
from sqlalchemy import Column, DateTime, Index, String, Uuid, func, text
from passlib.context import CryptContext

from shared.core.database import Base
from shared.utils.enums import UserRole

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class Users(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=UserRole.EMPLOYEE.value)
    department = Column(String(120), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    # Open signup only bootstraps one administrator; concurrent signups race here
    __table_args__ = (
        Index("uq_users_single_admin", "role", unique=True,
              postgresql_where=text("role = 'ADMIN'"),
              sqlite_where=text("role = 'ADMIN'")),
    )

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return bcrypt_context.verify(password, self.password)
