from pydantic import BaseModel, Field
from typing import Generic, Optional, TypeVar, Union
from uuid import UUID

from shared.utils.enums import UserRole

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    """The authenticated principal every operation receives explicitly."""
    user_id: UUID
    name: str
    email: str
    role: UserRole
    department: Optional[str] = None
    exp: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class CommonQueryParams(BaseModel):
    search: Optional[str] = None
    skip: Optional[int] = Field(0, ge=0)
    limit: Optional[int] = Field(None, ge=1)


class Lookup(BaseModel):
    id: Union[str, UUID]  # accepts both UUID and str
    name: str

    class Config:
        from_attributes = True


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
