import logging

from sqlalchemy.orm import Session

from shared.core.exceptions import UnauthenticatedError
from shared.utils.app_status_code import AppStatusCode
from ..schemas.authschemas import AuthenticationResponse, LoginRequest
from . import userservices

logger = logging.getLogger(__name__)


def login(db: Session, req: LoginRequest) -> AuthenticationResponse:
    user = userservices.get_user_by_email(db, req.email)

    if not user or not user.verify_password(req.password):
        logger.info("Failed login for %s", req.email)
        raise UnauthenticatedError(
            "Invalid email or password",
            status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID)

    return userservices.get_user_token(user)
