# app/crud/asset_management/assets_crud.py
import logging
from datetime import date
from typing import Dict, List, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from shared.core.schemas import Lookup
from shared.utils.app_status_code import AppStatusCode
from shared.wrappers.empty_string_model_wrapper import parse_date_value
from ...enum.asset_enum import DispositionStatus, OperationalStatus
from ...helpers.asset_status_helper import (
    EXPIRING_SOON, SWEEP_SKIP_STATUSES, expiry_horizon, resolve_operational_status)
from ...models.asset_management.asset_transfers import AssetTransfer
from ...models.asset_management.assets import Asset
from ...models.asset_management.categories import CATEGORY_MODELS
from ...schemas.asset_management.assets_schemas import (
    AssetCreate, AssetCreateResponse, AssetDropdownOptions, AssetFilterOptions, AssetOut, AssetUpdate,
    AssetUpdateResponse, AssetsExportRequest, AssetsExportResponse, AssetsFilterRequest, AssetsRequest,
    AssetsResponse, ExpiringSweepResult)

logger = logging.getLogger(__name__)

REQUIRED_ASSET_FIELDS = (
    "asset_id",
    "serial_number",
    "hardware_type",
    "owner_fullname",
    "hostname",
    "p_number",
    "cadre",
    "department",
    "operational_status",
    "disposition_status",
)

SEARCH_FIELDS = (
    "serial_number",
    "asset_id",
    "hostname",
    "owner_fullname",
    "model_number",
    "p_number",
    "dc_number",
    "vendor",
)

EXACT_FILTER_FIELDS = (
    "department",
    "hardware_type",
    "cadre",
    "building",
    "section",
    "operational_status",
    "disposition_status",
)

# query param -> (column, lower bound?)
DATE_RANGE_FILTERS = {
    "po_date_from": (Asset.po_date, True),
    "po_date_to": (Asset.po_date, False),
    "assigned_date_from": (Asset.assigned_date, True),
    "assigned_date_to": (Asset.assigned_date, False),
    "dc_date_from": (Asset.dc_date, True),
    "dc_date_to": (Asset.dc_date, False),
}

ASSET_EXPORT_COLUMNS = {
    "id": "ID",
    "asset_id": "Asset ID",
    "serial_number": "Serial Number",
    "hardware_type": "Hardware Type",
    "model_number": "Model Number",
    "owner_fullname": "Owner",
    "hostname": "Hostname",
    "p_number": "P Number",
    "cadre": "Cadre",
    "department": "Department",
    "section": "Section",
    "building": "Building",
    "vendor": "Vendor",
    "po_number": "PO Number",
    "po_date": "PO Date",
    "dc_number": "DC Number",
    "dc_date": "DC Date",
    "assigned_date": "Assigned Date",
    "replacement_due_period": "Replacement Due Period",
    "replacement_due_date": "Replacement Due Date",
    "operational_status": "Operational Status",
    "disposition_status": "Disposition Status",
}


def _commit(db: Session, action: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to %s: %s", action, e)
        raise StorageError(f"Failed to {action}", details=str(e))


# ----------------------------------------------------------------------
# STATUS SWEEP
# ----------------------------------------------------------------------

def sweep_expiring_assets(db: Session, today: Optional[date] = None) -> ExpiringSweepResult:
    """
    Force every asset due for replacement inside the expiry window to
    "expiring soon" in a single UPDATE. Running it twice in a row touches
    nothing the second time.
    """
    today = today or date.today()
    horizon = expiry_horizon(today)

    try:
        affected = (
            db.query(Asset)
            .filter(
                Asset.replacement_due_date.isnot(None),
                Asset.replacement_due_date >= today,
                Asset.replacement_due_date <= horizon,
                or_(
                    Asset.operational_status.is_(None),
                    func.lower(Asset.operational_status).notin_(
                        SWEEP_SKIP_STATUSES)
                )
            )
            .update({Asset.operational_status: EXPIRING_SOON},
                    synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Failed to check expiring assets", details=str(e))

    if affected:
        logger.info("Marked %s assets as '%s' (window %s .. %s)",
                    affected, EXPIRING_SOON, today, horizon)

    return ExpiringSweepResult(
        affectedRows=affected,
        checkDate=today,
        expiryThreshold=horizon,
    )


def refresh_expiring_statuses(db: Session):
    # a failed sweep must not fail the read that triggered it
    try:
        sweep_expiring_assets(db)
    except StorageError as e:
        logger.warning("Could not update expiring assets: %s", e.details or e.message)


# ----------------------------------------------------------------------
# FILTERING
# ----------------------------------------------------------------------

def _parse_filter_date(name: str, value: Optional[str]) -> Optional[date]:
    try:
        return parse_date_value(value)
    except ValueError:
        raise ValidationError(f"Invalid date for '{name}'", data={"field": name, "value": value})


def build_asset_filters(params: AssetsFilterRequest):
    filters = []

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            *[getattr(Asset, field).ilike(search_term) for field in SEARCH_FIELDS]
        ))

    for field in EXACT_FILTER_FIELDS:
        value = getattr(params, field)
        if value:
            filters.append(getattr(Asset, field) == value)

    for name, (column, lower_bound) in DATE_RANGE_FILTERS.items():
        value = _parse_filter_date(name, getattr(params, name))
        if value is None:
            continue
        filters.append(column >= value if lower_bound else column <= value)

    return filters


def get_assets_query(db: Session, params: AssetsFilterRequest):
    return db.query(Asset).filter(*build_asset_filters(params))


def _filters_applied(params: AssetsFilterRequest) -> Dict:
    applied = {field: getattr(params, field) for field in EXACT_FILTER_FIELDS}
    applied["search"] = params.search
    applied["date_filters"] = {
        name: getattr(params, name) for name in DATE_RANGE_FILTERS
    }
    return applied


# ----------------------------------------------------------------------
# CRUD OPERATIONS
# ----------------------------------------------------------------------

def get_assets(db: Session, params: AssetsRequest) -> AssetsResponse:
    refresh_expiring_statuses(db)

    base_query = get_assets_query(db, params)
    total = base_query.with_entities(func.count(Asset.id)).scalar()

    page = max(params.page, 1)
    limit = max(params.limit, 1)

    query = base_query.order_by(Asset.id.desc())
    if not params.noLimit:
        query = query.offset((page - 1) * limit).limit(limit)

    assets = [AssetOut.model_validate(a) for a in query.all()]

    return AssetsResponse(
        total=total,
        page=1 if params.noLimit else page,
        limit=total if params.noLimit else limit,
        data=assets,
        fetched=len(assets),
    )


def export_assets(db: Session, params: AssetsExportRequest) -> AssetsExportResponse:
    assets = [
        AssetOut.model_validate(a)
        for a in get_assets_query(db, params).order_by(Asset.id.desc()).all()
    ]
    logger.info("Exporting %s assets", len(assets))
    return AssetsExportResponse(
        data=assets,
        total=len(assets),
        filters_applied=_filters_applied(params),
    )


def get_asset_by_id(db: Session, asset_id: int) -> Optional[Asset]:
    return db.query(Asset).filter(Asset.id == asset_id).first()


def get_asset(db: Session, asset_id: int) -> AssetOut:
    db_asset = get_asset_by_id(db, asset_id)
    if not db_asset:
        raise NotFoundError("Asset not found")
    return AssetOut.model_validate(db_asset)


def create_asset(db: Session, asset: AssetCreate) -> AssetCreateResponse:
    data = asset.model_dump()

    missing = [field for field in REQUIRED_ASSET_FIELDS if not data.get(field)]
    if missing:
        raise ValidationError("Missing required fields", data={"missing_fields": missing})

    final_status, auto_applied = resolve_operational_status(
        data["replacement_due_date"], data["operational_status"])
    if auto_applied:
        logger.info("Asset %s automatically set to '%s' due to replacement date %s",
                    data["asset_id"], final_status, data["replacement_due_date"])
    data["operational_status"] = final_status

    db_asset = Asset(**data)
    db.add(db_asset)
    _commit(db, "create asset")
    db.refresh(db_asset)

    return AssetCreateResponse(
        asset_db_id=db_asset.id,
        auto_status_applied=auto_applied,
        final_operational_status=final_status,
    )


def update_asset(db: Session, asset_id: int, asset_update: AssetUpdate) -> AssetUpdateResponse:
    db_asset = get_asset_by_id(db, asset_id)
    if not db_asset:
        raise NotFoundError("Asset not found")

    update_data = asset_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationError("No fields provided to update")

    # required fields may be changed but never cleared
    cleared = [field for field in REQUIRED_ASSET_FIELDS
               if field in update_data and not update_data[field]]
    if cleared:
        raise ValidationError("Missing required fields", data={"missing_fields": cleared})

    auto_applied = False
    due_date = update_data.get("replacement_due_date")
    if due_date is not None:
        effective_status = update_data.get("operational_status") or db_asset.operational_status
        final_status, auto_applied = resolve_operational_status(due_date, effective_status)
        if final_status != effective_status:
            # the derived status wins over one sent in the same request
            update_data["operational_status"] = final_status
        if auto_applied:
            logger.info("Asset %s automatically updated to '%s' due to replacement date %s",
                        asset_id, final_status, due_date)

    for field, value in update_data.items():
        setattr(db_asset, field, value)

    _commit(db, "update asset")
    db.refresh(db_asset)

    return AssetUpdateResponse(
        auto_status_applied=auto_applied,
        final_operational_status=db_asset.operational_status,
    )


def delete_asset(db: Session, asset_id: int) -> Dict:
    db_asset = get_asset_by_id(db, asset_id)
    if not db_asset:
        raise NotFoundError("Asset not found")

    has_history = db.query(AssetTransfer.id).filter(
        AssetTransfer.asset_id == asset_id).first()
    if has_history:
        raise ConflictError(
            "Asset has transfer history and cannot be deleted",
            status_code=AppStatusCode.RECORD_IN_USE)

    db.delete(db_asset)
    _commit(db, "delete asset")
    logger.info("Deleted asset %s", asset_id)
    return {"id": asset_id}


def mark_asset_surplus(db: Session, asset_id: int) -> AssetOut:
    db_asset = get_asset_by_id(db, asset_id)
    if not db_asset:
        raise NotFoundError("Asset not found")

    db_asset.operational_status = OperationalStatus.surplus.value
    db_asset.disposition_status = DispositionStatus.surplus.value
    _commit(db, "mark asset as surplus")
    db.refresh(db_asset)
    return AssetOut.model_validate(db_asset)


# ----------------------------------------------------------------------
# LOOKUPS
# ----------------------------------------------------------------------

def _category_lookup(db: Session, category: str) -> List[Lookup]:
    _, id_column, value_column = CATEGORY_MODELS[category]
    rows = (
        db.query(id_column.label("id"), value_column.label("value"))
        .order_by(value_column.asc())
        .all()
    )
    return [Lookup(id=r.id, value=r.value) for r in rows]


def get_dropdown_options(db: Session) -> AssetDropdownOptions:
    return AssetDropdownOptions(
        model_number=_category_lookup(db, "model"),
        vendor=_category_lookup(db, "vendor"),
        operational_status=_category_lookup(db, "operational_status"),
        disposition_status=_category_lookup(db, "disposition_status"),
    )


def _distinct_values(db: Session, column) -> List[str]:
    rows = (
        db.query(column)
        .filter(column.isnot(None), column != "")
        .distinct()
        .order_by(column.asc())
        .all()
    )
    return [r[0] for r in rows]


def get_filter_options(db: Session) -> AssetFilterOptions:
    return AssetFilterOptions(
        departments=_distinct_values(db, Asset.department),
        hardware_types=_distinct_values(db, Asset.hardware_type),
        cadres=_distinct_values(db, Asset.cadre),
        buildings=_distinct_values(db, Asset.building),
        sections=_distinct_values(db, Asset.section),
        operational_statuses=_distinct_values(db, Asset.operational_status),
        disposition_statuses=_distinct_values(db, Asset.disposition_status),
    )
