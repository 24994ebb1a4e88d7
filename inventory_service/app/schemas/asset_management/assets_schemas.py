# app/schemas/asset_management/assets_schemas.py
from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import date

from shared.core.schemas import CommonQueryParams, Lookup
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class AssetBase(EmptyStringModel):
    asset_id: Optional[str] = None
    serial_number: Optional[str] = None
    hardware_type: Optional[str] = None
    model_number: Optional[str] = None
    owner_fullname: Optional[str] = None
    hostname: Optional[str] = None
    p_number: Optional[str] = None
    cadre: Optional[str] = None
    department: Optional[str] = None
    section: Optional[str] = None
    building: Optional[str] = None
    vendor: Optional[str] = None
    po_number: Optional[str] = None
    po_date: Optional[date] = None
    dc_number: Optional[str] = None
    dc_date: Optional[date] = None
    assigned_date: Optional[date] = None
    replacement_due_period: Optional[str] = None
    replacement_due_date: Optional[date] = None
    operational_status: Optional[str] = None
    disposition_status: Optional[str] = None


class AssetCreate(AssetBase):
    pass


class AssetUpdate(AssetBase):
    pass


class AssetOut(AssetBase):
    id: int

    model_config = {"from_attributes": True}


class AssetsFilterRequest(EmptyStringModel):
    search: Optional[str] = None
    department: Optional[str] = None
    hardware_type: Optional[str] = None
    cadre: Optional[str] = None
    building: Optional[str] = None
    section: Optional[str] = None
    operational_status: Optional[str] = None
    disposition_status: Optional[str] = None
    # parsed in the crud layer so bad values surface as a 400
    po_date_from: Optional[str] = None
    po_date_to: Optional[str] = None
    assigned_date_from: Optional[str] = None
    assigned_date_to: Optional[str] = None
    dc_date_from: Optional[str] = None
    dc_date_to: Optional[str] = None


class AssetsRequest(AssetsFilterRequest, CommonQueryParams):
    noLimit: bool = False


class AssetsExportRequest(AssetsFilterRequest):
    format: Optional[str] = "json"


class AssetsResponse(BaseModel):
    total: int
    page: int
    limit: int
    data: List[AssetOut]
    fetched: int


class AssetsExportResponse(BaseModel):
    data: List[AssetOut]
    total: int
    filters_applied: Dict


class AssetCreateResponse(BaseModel):
    asset_db_id: int
    auto_status_applied: bool
    final_operational_status: Optional[str] = None


class AssetUpdateResponse(BaseModel):
    auto_status_applied: bool
    final_operational_status: Optional[str] = None


class ExpiringSweepResult(BaseModel):
    affectedRows: int
    checkDate: date
    expiryThreshold: date


class AssetDropdownOptions(BaseModel):
    model_number: List[Lookup]
    vendor: List[Lookup]
    operational_status: List[Lookup]
    disposition_status: List[Lookup]


class AssetFilterOptions(BaseModel):
    departments: List[str]
    hardware_types: List[str]
    cadres: List[str]
    buildings: List[str]
    sections: List[str]
    operational_statuses: List[str]
    disposition_statuses: List[str]
