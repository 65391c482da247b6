from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.database import get_db
from shared.helpers.json_response_helper import created_response
from ..schemas import authschemas, userschema
from ..services import authservices, userservices

router = APIRouter(prefix="/api/users", tags=["Auth"])


@router.post("/signup", response_model=None, status_code=status.HTTP_201_CREATED)
def signup(
        new_user: userschema.UserCreate,
        db: Session = Depends(get_db)):
    result = userservices.create_user(db, new_user)
    return created_response(
        data=result,
        message="User registered successfully")


@router.post("/login", response_model=authschemas.AuthenticationResponse)
def login(
        req: authschemas.LoginRequest,
        db: Session = Depends(get_db)):
    return authservices.login(db, req)
