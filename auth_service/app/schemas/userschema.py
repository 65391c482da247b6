from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from uuid import UUID
from datetime import datetime


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    role: str
    department: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class UserRead(BaseModel):
    id: UUID
    name: str
    email: str
    role: str
    department: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True  # allows Pydantic to work with SQLAlchemy objects
    }
