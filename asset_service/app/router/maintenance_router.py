from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import created_response, updated_response
from ..crud import maintenance_crud as crud
from ..schemas.maintenance_schemas import (
    MaintenanceCreate, MaintenanceListResponse, MaintenanceOut, MaintenanceUpdate)

router = APIRouter(
    prefix="/api/maintenance",
    tags=["maintenance"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("", response_model=MaintenanceListResponse)
def get_maintenance_records(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_maintenance_records(db, current_user)


@router.post("", response_model=None, status_code=status.HTTP_201_CREATED)
def create_maintenance_record(
        payload: MaintenanceCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.create_maintenance_record(db, current_user, payload)
    return created_response(
        data=MaintenanceOut.model_validate(result),
        message="Maintenance scheduled successfully")


@router.put("/{record_id}", response_model=None)
def update_maintenance_status(
        record_id: UUID,
        payload: MaintenanceUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.update_maintenance_status(db, current_user, record_id, payload)
    return updated_response(
        data=MaintenanceOut.model_validate(result),
        message="Maintenance record updated successfully")
