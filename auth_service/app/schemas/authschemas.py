from pydantic import BaseModel, EmailStr

from .userschema import UserRead


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthenticationResponse(BaseModel):
    user: UserRead
    token: str
    token_type: str = "bearer"
