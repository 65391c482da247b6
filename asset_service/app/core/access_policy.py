"""Role-scoped visibility.

One table decides, per entity, which rows a principal may read and which
fields are removed from what they receive. Every read path in the crud
layer goes through ``scope_query`` and ``project``.
"""
from dataclasses import dataclass, field
from typing import Callable, FrozenSet

from sqlalchemy import and_, false, or_
from sqlalchemy.orm import Query, Session

from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ..models.assets import Asset
from ..models.asset_requests import AssetRequest
from ..models.maintenance_records import MaintenanceRecord


def owned_by(principal: UserToken):
    """SQL condition: the asset belongs to the principal.

    Linked owners compare by id; free-text owners (no owner_id) fall back to
    the principal's email or name.
    """
    return or_(
        Asset.owner_id == principal.user_id,
        and_(
            Asset.owner_id.is_(None),
            Asset.current_owner.in_([principal.email, principal.name]),
        ),
    )


def is_asset_owner(asset: Asset, principal: UserToken) -> bool:
    if asset.owner_id is not None:
        return asset.owner_id == principal.user_id
    return asset.current_owner in (principal.email, principal.name)


def _all_rows(db: Session, query: Query, principal: UserToken) -> Query:
    return query


def _own_requests(db: Session, query: Query, principal: UserToken) -> Query:
    return query.filter(AssetRequest.requested_by == principal.user_id)


def _owned_asset_maintenance(db: Session, query: Query, principal: UserToken) -> Query:
    owned_asset_ids = [
        row.id for row in db.query(Asset.id).filter(owned_by(principal)).all()
    ]
    if not owned_asset_ids:
        return query.filter(false())
    return query.filter(MaintenanceRecord.asset_id.in_(owned_asset_ids))


@dataclass(frozen=True)
class VisibilityRule:
    row_filter: Callable[[Session, Query, UserToken], Query] = _all_rows
    hidden_fields: FrozenSet[str] = field(default_factory=frozenset)


FULL_ACCESS = VisibilityRule()

POLICY = {
    "asset": {
        UserRole.ADMIN: FULL_ACCESS,
        UserRole.EMPLOYEE: VisibilityRule(hidden_fields=frozenset({"cost", "purchase_date"})),
    },
    "request": {
        UserRole.ADMIN: FULL_ACCESS,
        UserRole.EMPLOYEE: VisibilityRule(row_filter=_own_requests),
    },
    "maintenance": {
        UserRole.ADMIN: FULL_ACCESS,
        UserRole.EMPLOYEE: VisibilityRule(row_filter=_owned_asset_maintenance),
    },
    "audit": {
        UserRole.ADMIN: FULL_ACCESS,
        UserRole.EMPLOYEE: FULL_ACCESS,
    },
}


def rule_for(entity: str, principal: UserToken) -> VisibilityRule:
    # Unknown roles get the most restrictive rule defined for the entity
    rules = POLICY[entity]
    return rules.get(principal.role, rules[UserRole.EMPLOYEE])


def scope_query(db: Session, entity: str, principal: UserToken, query: Query) -> Query:
    return rule_for(entity, principal).row_filter(db, query, principal)


def project(entity: str, principal: UserToken, record: dict) -> dict:
    """Drop the fields the principal may not see (absent, not nulled)."""
    hidden = rule_for(entity, principal).hidden_fields
    if not hidden:
        return record
    return {k: v for k, v in record.items() if k not in hidden}
