# app/schemas/asset_management/asset_transfers_schemas.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class AssetTransferCreate(EmptyStringModel):
    asset_id: Optional[int] = None
    new_owner_fullname: Optional[str] = None
    new_hostname: Optional[str] = None
    new_p_number: Optional[str] = None
    new_cadre: Optional[str] = None
    new_department: Optional[str] = None
    new_section: Optional[str] = None
    new_building: Optional[str] = None
    transfer_reason: Optional[str] = None


class AssetTransferCreateResponse(BaseModel):
    transfer_id: int
    asset_id: int
    asset_serial_number: Optional[str] = None
    new_owner_fullname: str
    transferred_by_email: Optional[str] = None


class AssetTransferOut(BaseModel):
    id: int
    asset_id: int
    asset_serial_number: Optional[str] = None
    asset_identifier: Optional[str] = None
    hardware_type: Optional[str] = None
    model_number: Optional[str] = None
    vendor: Optional[str] = None

    previous_owner_fullname: Optional[str] = None
    previous_hostname: Optional[str] = None
    previous_p_number: Optional[str] = None
    previous_cadre: Optional[str] = None
    previous_department: Optional[str] = None
    previous_section: Optional[str] = None
    previous_building: Optional[str] = None

    new_owner_fullname: Optional[str] = None
    new_hostname: Optional[str] = None
    new_p_number: Optional[str] = None
    new_cadre: Optional[str] = None
    new_department: Optional[str] = None
    new_section: Optional[str] = None
    new_building: Optional[str] = None

    transfer_reason: Optional[str] = None
    transfer_date: Optional[datetime] = None
    transferred_by: Optional[str] = None
    transferred_by_user_id: Optional[int] = None
    transferred_by_user_email: str
    transferred_by_user_name: str
    transferred_by_user_role: str

    model_config = {"from_attributes": True}


class AssetTransferHistoryRequest(EmptyStringModel):
    page: int = 1
    limit: int = 50
    sort_key: Optional[str] = None
    sort_direction: Optional[str] = None


class AssetTransfersRequest(AssetTransferHistoryRequest):
    search: Optional[str] = None
    asset_id: Optional[int] = None


class AssetTransfersResponse(BaseModel):
    total: int
    page: int
    limit: int
    totalPages: int
    data: List[AssetTransferOut]
