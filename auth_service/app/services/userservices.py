import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.exceptions import ConflictError, NotFoundError, ValidationError
from shared.models.users import Users
from shared.utils.enums import UserRole
from ..schemas.authschemas import AuthenticationResponse
from ..schemas.userschema import UserCreate, UserRead

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[Users]:
    return db.query(Users).filter(func.lower(Users.email) == email.lower()).first()


def get_user_by_id(db: Session, user_id: UUID) -> Optional[Users]:
    return db.query(Users).filter(Users.id == user_id).first()


def _resolve_role(db: Session, requested: str) -> UserRole:
    try:
        role = UserRole(requested.upper())
    except ValueError:
        raise ValidationError("Invalid role specified. Must be ADMIN or EMPLOYEE.")

    # Open ADMIN signup only bootstraps the first administrator
    if role == UserRole.ADMIN:
        admin_exists = db.query(Users.id).filter(
            Users.role == UserRole.ADMIN.value).first()
        if admin_exists:
            logger.warning("ADMIN signup requested while an admin exists; creating EMPLOYEE")
            return UserRole.EMPLOYEE
    return role


def get_user_token(user: Users) -> AuthenticationResponse:
    return AuthenticationResponse(
        user=UserRead.model_validate(user),
        token=auth.create_user_token(user)
    )


def _insert_user(db: Session, user: UserCreate, email: str, role: UserRole) -> Users:
    user_instance = Users(
        name=user.name,
        email=email,
        role=role.value,
        department=user.department,
    )
    user_instance.set_password(user.password)
    db.add(user_instance)
    db.commit()
    return user_instance


def create_user(db: Session, user: UserCreate) -> AuthenticationResponse:
    email = user.email.lower()
    if get_user_by_email(db, email):
        raise ConflictError("User already exists")

    role = _resolve_role(db, user.role)

    try:
        user_instance = _insert_user(db, user, email, role)
    except IntegrityError:
        db.rollback()
        if role != UserRole.ADMIN or get_user_by_email(db, email):
            raise ConflictError("User already exists")

        # Another signup claimed the single admin seat first
        logger.warning("Concurrent ADMIN signup for %s; creating EMPLOYEE", email)
        try:
            user_instance = _insert_user(db, user, email, UserRole.EMPLOYEE)
        except IntegrityError:
            db.rollback()
            raise ConflictError("User already exists")

    db.refresh(user_instance)
    logger.info("User %s registered as %s", user_instance.email, user_instance.role)
    return get_user_token(user_instance)


def get_user(db: Session, user_id: UUID) -> UserRead:
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return UserRead.model_validate(user)
