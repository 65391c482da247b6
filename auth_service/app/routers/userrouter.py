from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ..schemas import userschema
from ..services import userservices

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/me", response_model=UserToken)
def me(current_user: UserToken = Depends(validate_current_token)):
    return current_user


@router.get("/{user_id}", response_model=userschema.UserRead)
def get_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        _: UserToken = Depends(allow_admin)):
    return userservices.get_user(db, user_id)
