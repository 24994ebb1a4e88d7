# app/router/asset_management/asset_transfers_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_db
from shared.core.schemas import JsonOutResult, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.asset_management import asset_transfers_crud as crud
from ...schemas.asset_management.asset_transfers_schemas import (
    AssetTransferCreate, AssetTransferCreateResponse, AssetTransferHistoryRequest, AssetTransferOut,
    AssetTransfersRequest, AssetTransfersResponse)

router = APIRouter(
    prefix="/api/asset-transfers",
    tags=["asset-transfers"],
)


@router.post("/", status_code=status.HTTP_201_CREATED,
             response_model=JsonOutResult[AssetTransferCreateResponse])
def create_transfer(
        transfer: AssetTransferCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.create_transfer(db, transfer, current_user)
    return success_response(
        data=result,
        message="Asset transferred successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.get("/all", response_model=JsonOutResult[AssetTransfersResponse])
def get_transfers(params: AssetTransfersRequest = Depends(), db: Session = Depends(get_db)):
    return success_response(data=crud.get_transfers(db, params))


@router.get("/asset-history/{asset_id}", response_model=JsonOutResult[AssetTransfersResponse])
def get_asset_transfer_history(
        asset_id: int,
        params: AssetTransferHistoryRequest = Depends(),
        db: Session = Depends(get_db)):
    return success_response(data=crud.get_asset_transfer_history(db, asset_id, params))


@router.get("/{transfer_id}", response_model=JsonOutResult[AssetTransferOut])
def get_transfer_by_id(transfer_id: int, db: Session = Depends(get_db)):
    return success_response(data=crud.get_transfer_by_id(db, transfer_id))
