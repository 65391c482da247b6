# app/router/assets_router.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import Lookup, UserToken
from shared.helpers.json_response_helper import created_response
from ..crud import assets_crud as crud
from ..schemas.assets_schemas import AssetCreate, AssetsRequest, AssetsResponse, AvailableAssetOut

router = APIRouter(
    prefix="/api/assets",
    tags=["assets"],
    dependencies=[Depends(validate_current_token)]
)


# -----------------------------------------------------------------
@router.get("", response_model=AssetsResponse)
def get_assets(
        params: AssetsRequest = Depends(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_assets(db, current_user, params)


@router.get("/available", response_model=List[AvailableAssetOut])
def get_available_assets(db: Session = Depends(get_db)):
    return crud.get_available_assets(db)


@router.get("/category-lookup", response_model=List[Lookup])
def category_lookup():
    return crud.asset_category_lookup()


@router.get("/status-lookup", response_model=List[Lookup])
def status_lookup():
    return crud.asset_status_lookup()


@router.get("/{asset_id}")
def get_asset(
        asset_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_asset(db, current_user, asset_id)


@router.post("", response_model=None, status_code=status.HTTP_201_CREATED)
def create_asset(
        asset: AssetCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    result = crud.create_asset(db, asset)
    return created_response(
        data=crud.serialize_asset(result, current_user),
        message="Asset created successfully")
