from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import created_response, updated_response
from ..crud import requests_crud as crud
from ..schemas.requests_schemas import (
    AssetRequestCreate, AssetRequestListResponse, AssetRequestOut, RequestStatusUpdate)

router = APIRouter(
    prefix="/api/requests",
    tags=["requests"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("", response_model=AssetRequestListResponse)
def get_requests(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_requests(db, current_user)


@router.post("", response_model=None, status_code=status.HTTP_201_CREATED)
def create_request(
        payload: AssetRequestCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.create_request(db, current_user, payload)
    return created_response(
        data=AssetRequestOut.model_validate(result),
        message="Request submitted successfully")


# Admin check happens inside the operation
@router.put("/{request_id}/status", response_model=None)
def update_request_status(
        request_id: UUID,
        payload: RequestStatusUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.update_request_status(db, current_user, request_id, payload.status)
    return updated_response(
        data=AssetRequestOut.model_validate(result),
        message=f"Request {result.status}")
