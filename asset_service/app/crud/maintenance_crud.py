import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from shared.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from shared.core.schemas import UserToken
from shared.utils.time_helpers import utcnow
from ..core import access_policy
from ..enum.asset_management_enum import (
    MAINTENANCE_TRANSITIONS, OPEN_MAINTENANCE_STATUSES, AssetStatus, MaintenanceStatus)
from ..models.maintenance_records import MaintenanceRecord
from ..schemas.maintenance_schemas import MaintenanceCreate, MaintenanceOut, MaintenanceUpdate
from . import assets_crud

logger = logging.getLogger(__name__)


def get_maintenance_records(db: Session, current_user: UserToken):
    query = access_policy.scope_query(
        db, "maintenance", current_user, db.query(MaintenanceRecord))
    total = query.with_entities(func.count(MaintenanceRecord.id)).scalar()

    rows = (
        query
        .options(joinedload(MaintenanceRecord.asset))
        .order_by(MaintenanceRecord.created_at.desc())
        .all()
    )
    return {
        "records": [MaintenanceOut.model_validate(r) for r in rows],
        "total": total
    }


def get_maintenance_by_id(db: Session, record_id: UUID) -> Optional[MaintenanceRecord]:
    return (
        db.query(MaintenanceRecord)
        .options(joinedload(MaintenanceRecord.asset))
        .filter(MaintenanceRecord.id == record_id)
        .first()
    )


def create_maintenance_record(db: Session, current_user: UserToken, payload: MaintenanceCreate) -> MaintenanceRecord:
    asset = assets_crud.get_asset_by_id(db, payload.asset_id)
    if not asset:
        raise NotFoundError("Asset not found")

    if not current_user.is_admin and not access_policy.is_asset_owner(asset, current_user):
        raise ForbiddenError(
            "You can only report maintenance for assets assigned to you.")

    record = MaintenanceRecord(
        asset_id=asset.id,
        issue=payload.issue,
        description=payload.description,
        priority=payload.priority.value,
        assigned_to=payload.assigned_to,
        scheduled_date=payload.scheduled_date,
        status=MaintenanceStatus.scheduled.value,
        created_by=current_user.user_id,
    )
    db.add(record)

    # Prior status is discarded; the owner fields are left as they were
    assets_crud.set_status(db, asset.id, AssetStatus.maintenance)

    db.commit()
    db.refresh(record)

    logger.info("Maintenance %s opened for asset %s by %s",
                record.id, asset.asset_tag, current_user.email)
    return record


def _has_other_open_ticket(db: Session, record: MaintenanceRecord) -> bool:
    return db.query(MaintenanceRecord.id).filter(
        MaintenanceRecord.asset_id == record.asset_id,
        MaintenanceRecord.id != record.id,
        MaintenanceRecord.status.in_(OPEN_MAINTENANCE_STATUSES)
    ).first() is not None


def update_maintenance_status(db: Session, current_user: UserToken, record_id: UUID, payload: MaintenanceUpdate) -> MaintenanceRecord:
    if not current_user.is_admin:
        raise ForbiddenError("Not authorized as an Admin")

    record = get_maintenance_by_id(db, record_id)
    if not record:
        raise NotFoundError("Maintenance record not found")

    changes = payload.model_dump(exclude_unset=True)
    current_status = MaintenanceStatus(record.status)
    new_status = changes.get("status")

    if new_status is not None and new_status != current_status:
        if new_status not in MAINTENANCE_TRANSITIONS[current_status]:
            raise InvalidStateError(
                f"Cannot move maintenance from {current_status.value} to {new_status.value}")
        record.status = new_status.value
    else:
        new_status = None

    if "cost" in changes:
        record.cost = changes["cost"]

    if new_status == MaintenanceStatus.completed:
        record.completion_date = changes.get("completion_date") or utcnow()
        # Ownership held before maintenance is not restored
        assets_crud.set_status(db, record.asset_id, AssetStatus.available)
    elif "completion_date" in changes and record.status == MaintenanceStatus.completed.value:
        record.completion_date = changes["completion_date"]

    if new_status == MaintenanceStatus.cancelled and not _has_other_open_ticket(db, record):
        assets_crud.set_status(
            db, record.asset_id, AssetStatus.available,
            expected_status=AssetStatus.maintenance)

    db.commit()
    db.refresh(record)

    if new_status is not None:
        logger.info("Maintenance %s moved %s -> %s by %s", record.id,
                    current_status.value, new_status.value, current_user.email)
    return record
