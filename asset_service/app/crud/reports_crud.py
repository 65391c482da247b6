from datetime import date, timedelta
from io import StringIO
from typing import Dict, List

import pandas as pd
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.config import settings
from ..enum.asset_management_enum import AssetStatus
from ..models.assets import Asset
from ..schemas.reports_schemas import CategoryCount, DashboardSummary, StatusCount

ASSET_EXPORT_COLUMNS = {
    "asset_tag": "Asset ID",
    "serial_number": "Serial Number",
    "name": "Name",
    "category": "Category",
    "status": "Status",
    "location": "Location",
    "department": "Department",
    "current_owner": "Current Owner",
    "purchase_date": "Purchase Date",
    "warranty_end": "Warranty End",
    "cost": "Cost",
}


def get_dashboard_summary(db: Session, today: date | None = None) -> DashboardSummary:
    today = today or date.today()
    window_end = today + timedelta(days=settings.WARRANTY_EXPIRY_WINDOW_DAYS)

    total_assets = db.query(func.count(Asset.id)).scalar() or 0
    in_use = db.query(func.count(Asset.id)).filter(
        Asset.status == AssetStatus.in_use.value).scalar() or 0
    total_value = db.query(func.coalesce(func.sum(Asset.cost), 0)).scalar() or 0
    upcoming_expiries = db.query(func.count(Asset.id)).filter(
        Asset.warranty_end.isnot(None),
        Asset.warranty_end >= today,
        Asset.warranty_end <= window_end
    ).scalar() or 0

    by_status = (
        db.query(Asset.status, func.count(Asset.id))
        .group_by(Asset.status)
        .order_by(Asset.status)
        .all()
    )
    by_category = (
        db.query(Asset.category, func.count(Asset.id).label("count"))
        .group_by(Asset.category)
        .order_by(func.count(Asset.id).desc(), Asset.category)
        .all()
    )

    utilization = round(in_use * 100 / total_assets, 1) if total_assets else 0.0

    return DashboardSummary(
        total_assets=total_assets,
        utilization_rate=utilization,
        upcoming_expiries=upcoming_expiries,
        total_value=float(total_value),
        assets_by_status=[StatusCount(name=s, value=c) for s, c in by_status],
        assets_by_category=[CategoryCount(name=n, count=c) for n, c in by_category],
    )


def _asset_rows(db: Session) -> List[Dict]:
    assets = db.query(Asset).order_by(Asset.created_at.desc()).all()
    return [
        {key: getattr(asset, key) for key in ASSET_EXPORT_COLUMNS}
        for asset in assets
    ]


def export_assets_csv(db: Session) -> str:
    df = pd.DataFrame(_asset_rows(db), columns=list(ASSET_EXPORT_COLUMNS))
    df = df.rename(columns=ASSET_EXPORT_COLUMNS)

    output = StringIO()
    df.to_csv(output, index=False)
    return output.getvalue()
