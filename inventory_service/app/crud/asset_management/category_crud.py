# app/crud/asset_management/category_crud.py
import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from shared.core.schemas import Lookup
from ...models.asset_management.categories import CATEGORY_MODELS

logger = logging.getLogger(__name__)


def _resolve_category(category: str):
    # only known keys ever reach a query
    config = CATEGORY_MODELS.get(category)
    if config is None:
        raise ValidationError("Invalid category", data={"allowed": sorted(CATEGORY_MODELS)})
    return config


def get_categories(db: Session, category: str) -> List[Lookup]:
    _, id_column, value_column = _resolve_category(category)
    rows = (
        db.query(id_column.label("id"), value_column.label("value"))
        .order_by(value_column.asc())
        .all()
    )
    return [Lookup(id=r.id, value=r.value) for r in rows]


def add_category(db: Session, category: str, value: Optional[str]) -> Lookup:
    model, id_column, value_column = _resolve_category(category)

    value = (value or "").strip()
    if not value:
        raise ValidationError("Category value is required")

    existing = db.query(id_column).filter(
        func.lower(value_column) == value.lower()  # Case-insensitive
    ).first()
    if existing:
        raise ConflictError("Category already exists")

    entry = model(**{value_column.key: value})
    db.add(entry)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Failed to add category", details=str(e))
    db.refresh(entry)

    logger.info("Added %s '%s'", category, value)
    return Lookup(id=getattr(entry, id_column.key), value=value)


def delete_category(db: Session, category: str, category_id: int) -> dict:
    model, id_column, _ = _resolve_category(category)

    entry = db.query(model).filter(id_column == category_id).first()
    if not entry:
        raise NotFoundError("Category not found")

    db.delete(entry)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Failed to delete category", details=str(e))

    logger.info("Deleted %s %s", category, category_id)
    return {"id": category_id}
