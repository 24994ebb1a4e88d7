# app/router/asset_management/assets_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.database import get_db
from shared.core.schemas import JsonOutResult
from shared.helpers.export_helper import export_to_excel
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.asset_management import assets_crud as crud
from ...schemas.asset_management.assets_schemas import (
    AssetCreate, AssetCreateResponse, AssetDropdownOptions, AssetFilterOptions, AssetOut, AssetUpdate,
    AssetUpdateResponse, AssetsExportRequest, AssetsExportResponse, AssetsRequest, AssetsResponse,
    ExpiringSweepResult)

router = APIRouter(
    prefix="/api/assets",
    tags=["assets"],
)


# -----------------------------------------------------------------
@router.post("/", status_code=status.HTTP_201_CREATED, response_model=JsonOutResult[AssetCreateResponse])
def create_asset(asset: AssetCreate, db: Session = Depends(get_db)):
    result = crud.create_asset(db, asset)
    return success_response(
        data=result,
        message="Asset created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY)


@router.get("/all", response_model=JsonOutResult[AssetsResponse])
def get_assets(params: AssetsRequest = Depends(), db: Session = Depends(get_db)):
    return success_response(data=crud.get_assets(db, params))


@router.get("/export", response_model=JsonOutResult[AssetsExportResponse])
def export_assets(params: AssetsExportRequest = Depends(), db: Session = Depends(get_db)):
    result = crud.export_assets(db, params)

    if (params.format or "json").lower() == "xlsx":
        rows = [a.model_dump() for a in result.data]
        return export_to_excel(rows, filename="assets_export.xlsx",
                               column_map=crud.ASSET_EXPORT_COLUMNS, sheet_name="Assets")

    return success_response(
        data=result,
        message=f"Successfully exported {result.total} assets")


@router.post("/check-expiring", response_model=JsonOutResult[ExpiringSweepResult])
def check_expiring_assets(db: Session = Depends(get_db)):
    result = crud.sweep_expiring_assets(db)
    return success_response(
        data=result,
        message=f"Updated {result.affectedRows} assets to 'expiring soon' status",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.post("/auto-update-status", response_model=JsonOutResult[ExpiringSweepResult])
def auto_update_asset_status(db: Session = Depends(get_db)):
    return check_expiring_assets(db)


@router.get("/dropdown-options", response_model=JsonOutResult[AssetDropdownOptions])
def get_dropdown_options(db: Session = Depends(get_db)):
    return success_response(data=crud.get_dropdown_options(db))


@router.get("/filter-options", response_model=JsonOutResult[AssetFilterOptions])
def get_filter_options(db: Session = Depends(get_db)):
    return success_response(data=crud.get_filter_options(db))


@router.get("/{asset_id}", response_model=JsonOutResult[AssetOut])
def get_asset(asset_id: int, db: Session = Depends(get_db)):
    return success_response(data=crud.get_asset(db, asset_id))


@router.put("/{asset_id}", response_model=JsonOutResult[AssetUpdateResponse])
def update_asset(asset_id: int, asset_update: AssetUpdate, db: Session = Depends(get_db)):
    result = crud.update_asset(db, asset_id, asset_update)
    return success_response(
        data=result,
        message="Asset updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{asset_id}")
def delete_asset(asset_id: int, db: Session = Depends(get_db)):
    result = crud.delete_asset(db, asset_id)
    return success_response(
        data=result,
        message="Asset deleted successfully",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY)


@router.put("/{asset_id}/surplus", response_model=JsonOutResult[AssetOut])
def mark_asset_surplus(asset_id: int, db: Session = Depends(get_db)):
    result = crud.mark_asset_surplus(db, asset_id)
    return success_response(
        data=result,
        message="Asset marked as surplus successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY)
