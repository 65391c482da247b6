from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import created_response
from ..crud import audit_crud as crud
from ..schemas.audit_schemas import AuditCreate, AuditListResponse, AuditOut

router = APIRouter(
    prefix="/api/audit",
    tags=["audit"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("", response_model=AuditListResponse)
def get_audit_logs(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_audit_logs(db, current_user)


@router.post("", response_model=None, status_code=status.HTTP_201_CREATED)
def log_audit(
        payload: AuditCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.log_audit(db, current_user, payload)
    return created_response(
        data=AuditOut.model_validate(result),
        message="Audit entry logged")
