import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_db
from shared.core.exceptions import ForbiddenError, UnauthenticatedError
from shared.core.schemas import UserToken
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_minutes: Optional[int] = None):
    payload = data.copy()
    expires = datetime.now(timezone.utc) + \
        timedelta(minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires

    token = jwt.encode(payload, settings.JWT_SECRET,
                       algorithm=settings.JWT_ALGORITHM)
    return token


def create_user_token(user: Users) -> str:
    return create_access_token({"user_id": str(user.id), "role": user.role})


def verify_token(token: str) -> dict:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise UnauthenticatedError(
            "Not authorized, token failed",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED)

    if not payload.get("user_id"):
        raise UnauthenticatedError("Invalid token structure")
    return payload


def to_user_token(user: Users, exp: Optional[int] = None) -> UserToken:
    return UserToken(
        user_id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        department=user.department,
        exp=exp
    )


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedError("Not authorized, no token provided")

    payload = verify_token(credentials.credentials)

    try:
        user_id = UUID(str(payload["user_id"]))
    except ValueError:
        raise UnauthenticatedError("Invalid token structure")

    # Fetch the user so role changes take effect immediately
    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        logger.warning("Token presented for unknown user %s", user_id)
        raise UnauthenticatedError(
            "Not authorized, user not found",
            status_code=AppStatusCode.AUTHENTICATION_USER_INVALID)

    return to_user_token(user, payload.get("exp"))


def allow_admin(current_user: UserToken = Depends(validate_current_token)):
    if not current_user.is_admin:
        raise ForbiddenError("Not authorized as an Admin")

    return current_user
