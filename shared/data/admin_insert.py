"""
Seed the first admin account.

Run once after the tables exist:

    ADMIN_EMAIL=admin@company.com ADMIN_PASSWORD=... python -m shared.data.admin_insert
"""
import logging
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import Base, SessionLocal, engine
from shared.models.users import Users
from shared.utils.enums import UserRole, UserStatus

logger = logging.getLogger(__name__)


def seed_admin(db: Session, email: str, password: str, name: str = "Administrator") -> Optional[Users]:
    existing_admin = db.query(Users).filter(
        func.lower(Users.email) == email.lower()).first()
    if existing_admin:
        logger.info("Admin already exists: %s", existing_admin.email)
        return None

    admin = Users(
        name=name,
        email=email,
        role=UserRole.ADMIN.value,
        status=UserStatus.ACTIVE.value
    )
    admin.set_password(password)
    db.add(admin)
    db.commit()
    logger.info("Admin created: %s", email)
    return admin


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
            seed_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        else:
            logger.warning("ADMIN_EMAIL / ADMIN_PASSWORD not set, skipping admin")
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()
