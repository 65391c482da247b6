from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_db
from shared.utils.time_helpers import utcnow
from ..crud import reports_crud as crud
from ..schemas.reports_schemas import DashboardSummary

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(allow_admin)]
)


@router.get("/dashboard-summary", response_model=DashboardSummary)
def get_dashboard_summary(db: Session = Depends(get_db)):
    return crud.get_dashboard_summary(db)


@router.get("/export/assets", response_class=Response)
def export_assets(db: Session = Depends(get_db)):
    filename = f"assets_{utcnow():%Y%m%d}.csv"
    return Response(
        content=crud.export_assets_csv(db),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
