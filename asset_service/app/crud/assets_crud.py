# app/crud/assets_crud.py
import logging
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, NotFoundError
from shared.core.schemas import Lookup, UserToken
from shared.utils.time_helpers import utcnow
from ..core import access_policy
from ..enum.asset_management_enum import AssetCategory, AssetStatus
from ..models.assets import Asset
from ..schemas.assets_schemas import AssetCreate, AssetOut, AssetsRequest, AvailableAssetOut

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# READ
# ----------------------------------------------------------------------

def build_asset_filters(params: AssetsRequest):
    filters = []

    if params.status and params.status.lower() != "all":
        filters.append(func.lower(Asset.status) == params.status.lower())

    if params.category and params.category.lower() != "all":
        filters.append(func.lower(Asset.category) == params.category.lower())

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            Asset.asset_tag.ilike(search_term),
            Asset.name.ilike(search_term),
            Asset.serial_number.ilike(search_term)
        ))

    return filters


def serialize_asset(asset: Asset, current_user: UserToken) -> Dict:
    return access_policy.project(
        "asset", current_user, AssetOut.model_validate(asset).model_dump())


def get_assets(db: Session, current_user: UserToken, params: AssetsRequest):
    base_query = access_policy.scope_query(
        db, "asset", current_user, db.query(Asset).filter(*build_asset_filters(params)))
    total = base_query.with_entities(func.count(Asset.id)).scalar()

    results = (
        base_query
        .order_by(Asset.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    assets = [serialize_asset(asset, current_user) for asset in results]
    return {"assets": assets, "total": total}


def get_available_assets(db: Session) -> List[AvailableAssetOut]:
    rows = (
        db.query(Asset)
        .filter(Asset.status == AssetStatus.available.value)
        .order_by(Asset.name.asc())
        .all()
    )
    return [AvailableAssetOut.model_validate(row) for row in rows]


def get_asset_by_id(db: Session, asset_id: UUID) -> Optional[Asset]:
    return db.query(Asset).filter(Asset.id == asset_id).first()


def get_asset(db: Session, current_user: UserToken, asset_id: UUID) -> Dict:
    asset = get_asset_by_id(db, asset_id)
    if not asset:
        raise NotFoundError("Asset not found")
    return serialize_asset(asset, current_user)


def asset_category_lookup() -> List[Lookup]:
    return [Lookup(id=c.value, name=c.value) for c in AssetCategory]


def asset_status_lookup() -> List[Lookup]:
    return [Lookup(id=s.value, name=s.name.replace("_", " ").capitalize())
            for s in AssetStatus]


# ----------------------------------------------------------------------
# WRITE
# ----------------------------------------------------------------------

def _duplicate_message(existing: Asset, asset_tag: str) -> str:
    field = "ID" if existing.asset_tag == asset_tag else "Serial Number"
    return f"Asset with this {field} already exists"


def create_asset(db: Session, asset: AssetCreate) -> Asset:
    existing = db.query(Asset).filter(or_(
        Asset.asset_tag == asset.asset_tag,
        Asset.serial_number == asset.serial_number
    )).first()

    if existing:
        raise ConflictError(_duplicate_message(existing, asset.asset_tag))

    db_asset = Asset(**asset.model_dump(mode="python"))
    db_asset.category = asset.category.value
    db_asset.status = asset.status.value
    db.add(db_asset)

    try:
        db.commit()
    except IntegrityError:
        # A concurrent insert won the unique constraint
        db.rollback()
        existing = db.query(Asset).filter(or_(
            Asset.asset_tag == asset.asset_tag,
            Asset.serial_number == asset.serial_number
        )).first()
        message = _duplicate_message(existing, asset.asset_tag) if existing \
            else "Asset with this ID already exists"
        raise ConflictError(message)

    db.refresh(db_asset)
    logger.info("Asset %s (%s) created with status %s",
                db_asset.asset_tag, db_asset.id, db_asset.status)
    return db_asset


def set_status(
    db: Session,
    asset_id: UUID,
    new_status: AssetStatus,
    new_owner: Optional[str] = None,
    owner_id: Optional[UUID] = None,
    expected_status: Optional[AssetStatus] = None,
) -> bool:
    """Overwrite an asset's status (and owner when given) without committing.

    With ``expected_status`` the update only applies while the asset is still
    in that status; the return value says whether a row was changed.
    """
    values = {Asset.status: new_status.value, Asset.updated_at: utcnow()}
    if new_owner is not None:
        values[Asset.current_owner] = new_owner
    if owner_id is not None:
        values[Asset.owner_id] = owner_id

    query = db.query(Asset).filter(Asset.id == asset_id)
    if expected_status is not None:
        query = query.filter(Asset.status == expected_status.value)

    updated = query.update(values, synchronize_session="fetch")
    return updated > 0
