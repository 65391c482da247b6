import logging
import uuid
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.exceptions import (
    ConflictError, ForbiddenError, InvalidStateError, NotFoundError, ValidationError)
from shared.core.schemas import UserToken
from shared.utils.time_helpers import utcnow
from ..core import access_policy
from ..enum.asset_management_enum import AssetStatus, RequestStatus
from ..models.asset_requests import AssetRequest
from ..schemas.requests_schemas import AssetRequestCreate, AssetRequestOut
from . import assets_crud

logger = logging.getLogger(__name__)

DEFAULT_DEPARTMENT = "General"
DECISION_STATUSES = (RequestStatus.approved.value, RequestStatus.rejected.value)


def generate_request_no() -> str:
    return f"REQ-{uuid.uuid4().hex[:10].upper()}"


def get_requests(db: Session, current_user: UserToken):
    query = access_policy.scope_query(
        db, "request", current_user, db.query(AssetRequest))
    total = query.with_entities(func.count(AssetRequest.id)).scalar()
    rows = query.order_by(AssetRequest.created_at.desc()).all()

    return {
        "requests": [AssetRequestOut.model_validate(r) for r in rows],
        "total": total
    }


def get_request_by_id(db: Session, request_id: UUID) -> Optional[AssetRequest]:
    return db.query(AssetRequest).filter(AssetRequest.id == request_id).first()


def create_request(db: Session, current_user: UserToken, payload: AssetRequestCreate) -> AssetRequest:
    has_type = bool(payload.asset_type)
    has_asset = payload.specific_asset_id is not None

    if has_type == has_asset or not payload.reason:
        raise ValidationError(
            "Request details and reason are required. "
            "Provide either an asset type or a specific asset, not both.")

    asset_type = payload.asset_type
    if has_asset:
        asset = assets_crud.get_asset_by_id(db, payload.specific_asset_id)
        if not asset or asset.status != AssetStatus.available.value:
            raise InvalidStateError("This asset is not available for request.")
        asset_type = asset.category

    request = AssetRequest(
        request_no=generate_request_no(),
        requested_by=current_user.user_id,
        employee_name=current_user.name,
        department=current_user.department or DEFAULT_DEPARTMENT,
        asset_type=asset_type,
        reason=payload.reason,
        specific_asset_id=payload.specific_asset_id,
        status=RequestStatus.pending.value,
    )
    db.add(request)
    db.commit()
    db.refresh(request)

    logger.info("Request %s created by %s for %s",
                request.request_no, current_user.email, request.asset_type)
    return request


def update_request_status(db: Session, current_user: UserToken, request_id: UUID, status: Optional[str]) -> AssetRequest:
    # Checked here as well as on the route
    if not current_user.is_admin:
        raise ForbiddenError("Not authorized.")

    if status not in DECISION_STATUSES:
        raise ValidationError("Invalid status.")

    request = get_request_by_id(db, request_id)
    if not request:
        raise NotFoundError("Request not found.")

    if request.status != RequestStatus.pending.value:
        raise InvalidStateError(
            f"Request has already been {request.status}.")

    # Claim the decision only while the row is still pending
    claimed = db.query(AssetRequest).filter(
        AssetRequest.id == request_id,
        AssetRequest.status == RequestStatus.pending.value
    ).update({
        AssetRequest.status: status,
        AssetRequest.decided_by: current_user.user_id,
        AssetRequest.decided_at: utcnow(),
        AssetRequest.updated_at: utcnow(),
    }, synchronize_session="fetch")
    if not claimed:
        db.rollback()
        logger.warning("Decision on %s refused: no longer pending", request_id)
        raise InvalidStateError("Request has already been decided.")

    if status == RequestStatus.approved.value and request.specific_asset_id:
        assigned = assets_crud.set_status(
            db,
            request.specific_asset_id,
            AssetStatus.in_use,
            new_owner=request.employee_name,
            owner_id=request.requested_by,
            expected_status=AssetStatus.available,
        )
        if not assigned:
            db.rollback()
            logger.warning("Approval of %s refused: asset %s is no longer available",
                           request.request_no, request.specific_asset_id)
            raise ConflictError("The requested asset is no longer available.")

    # Request decision and asset assignment commit together
    db.commit()
    db.refresh(request)

    logger.info("Request %s %s by %s",
                request.request_no, status, current_user.email)
    return request
