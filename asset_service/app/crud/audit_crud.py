import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from shared.core.exceptions import NotFoundError
from shared.core.schemas import UserToken
from ..core import access_policy
from ..models.audit_logs import AuditLog
from ..schemas.audit_schemas import AuditCreate, AuditOut
from . import assets_crud

logger = logging.getLogger(__name__)


def get_audit_logs(db: Session, current_user: UserToken):
    query = access_policy.scope_query(db, "audit", current_user, db.query(AuditLog))
    total = query.with_entities(func.count(AuditLog.id)).scalar()

    rows = (
        query
        .options(joinedload(AuditLog.asset), joinedload(AuditLog.performer))
        .order_by(AuditLog.created_at.desc())
        .all()
    )
    return {"logs": [AuditOut.model_validate(r) for r in rows], "total": total}


def log_audit(db: Session, current_user: UserToken, payload: AuditCreate) -> AuditLog:
    asset = assets_crud.get_asset_by_id(db, payload.asset_id)
    if not asset:
        raise NotFoundError("Asset not found")

    log = AuditLog(
        asset_id=asset.id,
        performed_by=current_user.user_id,
        action=payload.action.value,
        status=payload.status.value,
        location=payload.location or asset.location,
        notes=payload.notes,
    )
    db.add(log)
    db.commit()
    db.refresh(log)

    logger.info("Audit %s/%s logged for asset %s by %s",
                log.action, log.status, asset.asset_tag, current_user.email)
    return log
