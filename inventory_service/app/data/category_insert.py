"""
Seed the default status lookups used by the asset dropdowns.

    python -m inventory_service.app.data.category_insert
"""
import logging
from typing import Dict
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import Base, SessionLocal, engine
from ..models.asset_management.categories import CATEGORY_MODELS

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_VALUES = {
    "operational_status": ["active", "expiring soon", "dead", "surplus"],
    "disposition_status": ["in use", "in store", "surplus"],
}


def seed_categories(db: Session, values: Dict = DEFAULT_CATEGORY_VALUES) -> int:
    added = 0
    for category, names in values.items():
        model, _, value_column = CATEGORY_MODELS[category]
        for name in names:
            exists = db.query(model).filter(
                func.lower(value_column) == name.lower()).first()
            if not exists:
                db.add(model(**{value_column.key: name}))
                added += 1
    db.commit()
    return added


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        logger.info("Added %s lookup values", seed_categories(db))
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()
