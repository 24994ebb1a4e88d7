# app/crud/asset_management/asset_transfers_crud.py
import logging
import math
from typing import Dict, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError, StorageError, ValidationError
from shared.core.schemas import UserToken
from shared.models.users import Users
from ...enum.asset_enum import TransferSortDirection
from ...helpers.transfer_helper import ASSIGNMENT_FIELDS, merge_assignment
from ...models.asset_management.asset_transfers import AssetTransfer
from ...models.asset_management.assets import Asset
from ...schemas.asset_management.asset_transfers_schemas import (
    AssetTransferCreate, AssetTransferCreateResponse, AssetTransferHistoryRequest, AssetTransferOut,
    AssetTransfersRequest, AssetTransfersResponse)

logger = logging.getLogger(__name__)

REQUIRED_TRANSFER_FIELDS = (
    "asset_id",
    "new_owner_fullname",
    "new_cadre",
    "new_department",
)

# shown for transfers with no (or a since removed) acting user
SYSTEM_USER_EMAIL = "system@company.com"
SYSTEM_USER_NAME = "System"
SYSTEM_USER_ROLE = "system"

DEFAULT_SORT_KEY = "transfer_date"

TRANSFER_SORT_COLUMNS = {
    "transfer_date": AssetTransfer.transfer_date,
    "asset_serial_number": AssetTransfer.asset_serial_number,
    "hardware_type": Asset.hardware_type,
    "previous_owner_fullname": AssetTransfer.previous_owner_fullname,
    "new_owner_fullname": AssetTransfer.new_owner_fullname,
    "transfer_reason": AssetTransfer.transfer_reason,
    "transferred_by_user_email": Users.email,
    "new_department": AssetTransfer.new_department,
    "previous_department": AssetTransfer.previous_department,
}

HISTORY_SORT_COLUMNS = {
    key: TRANSFER_SORT_COLUMNS[key]
    for key in ("transfer_date", "new_owner_fullname", "transfer_reason")
}


# ----------------------------------------------------------------------
# QUERY HELPERS
# ----------------------------------------------------------------------

def get_transfers_query(db: Session):
    return (
        db.query(
            AssetTransfer,
            Asset.asset_id.label("asset_identifier"),
            Asset.serial_number.label("current_serial_number"),
            Asset.hardware_type.label("hardware_type"),
            Asset.model_number.label("model_number"),
            Asset.vendor.label("vendor"),
            Users.email.label("user_email"),
            Users.name.label("user_name"),
            Users.role.label("user_role"),
        )
        .outerjoin(Asset, AssetTransfer.asset_id == Asset.id)
        .outerjoin(Users, AssetTransfer.transferred_by_user_id == Users.id)
    )


def build_transfer_filters(params: AssetTransfersRequest):
    filters = []

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            AssetTransfer.asset_serial_number.ilike(search_term),
            AssetTransfer.new_owner_fullname.ilike(search_term),
            AssetTransfer.previous_owner_fullname.ilike(search_term),
            Asset.hardware_type.ilike(search_term),
            AssetTransfer.transfer_reason.ilike(search_term),
            Asset.asset_id.ilike(search_term),
            AssetTransfer.new_department.ilike(search_term),
            AssetTransfer.previous_department.ilike(search_term),
            Users.email.ilike(search_term),
        ))

    if params.asset_id:
        filters.append(AssetTransfer.asset_id == params.asset_id)

    return filters


def _order_by(sort_key: Optional[str], sort_direction: Optional[str], allowed: Dict):
    # unknown keys fall back silently
    column = allowed.get(sort_key, allowed[DEFAULT_SORT_KEY])
    if (sort_direction or "").upper() == TransferSortDirection.asc.value:
        return [column.asc(), AssetTransfer.id.asc()]
    return [column.desc(), AssetTransfer.id.desc()]


def to_transfer_out(row) -> AssetTransferOut:
    transfer = row.AssetTransfer
    data = {c.name: getattr(transfer, c.name) for c in AssetTransfer.__table__.columns}
    data.update({
        "asset_serial_number": transfer.asset_serial_number or row.current_serial_number,
        "asset_identifier": row.asset_identifier,
        "hardware_type": row.hardware_type,
        "model_number": row.model_number,
        "vendor": row.vendor,
        "transferred_by_user_email": row.user_email or SYSTEM_USER_EMAIL,
        "transferred_by_user_name": row.user_name or SYSTEM_USER_NAME,
        "transferred_by_user_role": row.user_role or SYSTEM_USER_ROLE,
    })
    return AssetTransferOut.model_validate(data)


def _paginate(query, params: AssetTransferHistoryRequest, allowed_sort: Dict) -> AssetTransfersResponse:
    total = query.with_entities(func.count(AssetTransfer.id)).scalar()

    page = max(params.page, 1)
    limit = max(params.limit, 1)

    rows = (
        query
        .order_by(*_order_by(params.sort_key, params.sort_direction, allowed_sort))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return AssetTransfersResponse(
        total=total,
        page=page,
        limit=limit,
        totalPages=math.ceil(total / limit),
        data=[to_transfer_out(r) for r in rows],
    )


# ----------------------------------------------------------------------
# CRUD OPERATIONS
# ----------------------------------------------------------------------

def create_transfer(db: Session, transfer: AssetTransferCreate,
                    current_user: UserToken) -> AssetTransferCreateResponse:
    data = transfer.model_dump()
    missing = [field for field in REQUIRED_TRANSFER_FIELDS if not data.get(field)]
    if missing:
        raise ValidationError("Missing required fields", data={"missing_fields": missing})

    try:
        # lock the asset so the snapshot and the overwrite see the same row
        db_asset = (
            db.query(Asset)
            .filter(Asset.id == transfer.asset_id)
            .with_for_update()
            .first()
        )
        if not db_asset:
            raise NotFoundError("Asset not found")

        previous = {field: getattr(db_asset, field) for field in ASSIGNMENT_FIELDS}
        requested = {field: data.get(f"new_{field}") for field in ASSIGNMENT_FIELDS}
        applied = merge_assignment(requested, previous)

        actor = db.query(Users).filter(Users.id == current_user.user_id).first()
        actor_email = actor.email if actor else current_user.email

        db_transfer = AssetTransfer(
            asset_id=db_asset.id,
            asset_serial_number=db_asset.serial_number,
            transfer_reason=data.get("transfer_reason"),
            transferred_by=actor_email,
            transferred_by_user_id=actor.id if actor else None,
            **{f"previous_{field}": value for field, value in previous.items()},
            **{f"new_{field}": value for field, value in applied.items()},
        )
        db.add(db_transfer)

        for field, value in applied.items():
            setattr(db_asset, field, value)

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Asset transfer for asset %s rolled back: %s", transfer.asset_id, e)
        raise StorageError("Failed to transfer asset", details=str(e))
    except NotFoundError:
        db.rollback()
        raise

    logger.info("Asset %s transferred from '%s' to '%s' by %s",
                db_asset.id, previous["owner_fullname"], applied["owner_fullname"], actor_email)

    return AssetTransferCreateResponse(
        transfer_id=db_transfer.id,
        asset_id=db_asset.id,
        asset_serial_number=db_transfer.asset_serial_number,
        new_owner_fullname=db_transfer.new_owner_fullname,
        transferred_by_email=actor_email,
    )


def get_transfers(db: Session, params: AssetTransfersRequest) -> AssetTransfersResponse:
    query = get_transfers_query(db).filter(*build_transfer_filters(params))
    return _paginate(query, params, TRANSFER_SORT_COLUMNS)


def get_asset_transfer_history(db: Session, asset_id: int,
                               params: AssetTransferHistoryRequest) -> AssetTransfersResponse:
    query = get_transfers_query(db).filter(AssetTransfer.asset_id == asset_id)
    return _paginate(query, params, HISTORY_SORT_COLUMNS)


def get_transfer_by_id(db: Session, transfer_id: int) -> AssetTransferOut:
    row = get_transfers_query(db).filter(AssetTransfer.id == transfer_id).first()
    if not row:
        raise NotFoundError("Transfer record not found")
    return to_transfer_out(row)
