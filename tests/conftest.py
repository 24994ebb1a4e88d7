import os

# must be set before any application module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"

from datetime import date

import pytest
from dateutil.relativedelta import relativedelta
from fastapi.testclient import TestClient

from shared.core.auth import create_access_token
from shared.core.database import Base, SessionLocal, engine
from shared.models.users import Users
from shared.utils.enums import UserRole, UserStatus
from auth_service.app.main import app as auth_app
from inventory_service.app.main import app as inventory_app
from inventory_service.app.models.asset_management.assets import Asset


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def inventory_client():
    return TestClient(inventory_app)


@pytest.fixture
def auth_client():
    return TestClient(auth_app)


@pytest.fixture
def make_user(db_session):
    def _make_user(email="user@company.com", password="secret123", name="Test User",
                   role=UserRole.USER.value, status=UserStatus.ACTIVE.value):
        user = Users(name=name, email=email, role=role, status=status)
        user.set_password(password)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


def token_for(user: Users) -> str:
    return create_access_token({"user_id": user.id, "email": user.email, "role": user.role})


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(make_user):
    return make_user(email="admin@company.com", name="Admin", role=UserRole.ADMIN.value)


@pytest.fixture
def regular_user(make_user):
    return make_user(email="jane@company.com", name="Jane Doe")


@pytest.fixture
def admin_headers(admin_user):
    return bearer(token_for(admin_user))


@pytest.fixture
def user_headers(regular_user):
    return bearer(token_for(regular_user))


def asset_payload(**overrides) -> dict:
    payload = {
        "asset_id": "AST-001",
        "serial_number": "SN-0001",
        "hardware_type": "Laptop",
        "model_number": "Latitude 5420",
        "owner_fullname": "John Smith",
        "hostname": "host-001",
        "p_number": "P-100",
        "cadre": "Engineering",
        "department": "IT",
        "section": "Infrastructure",
        "building": "HQ",
        "vendor": "Dell",
        "po_number": "PO-1",
        "po_date": "2023-01-15",
        "dc_number": "DC-1",
        "dc_date": "2023-01-20",
        "assigned_date": "2023-02-01",
        "replacement_due_period": "5 years",
        "replacement_due_date": None,
        "operational_status": "active",
        "disposition_status": "in use",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_asset(inventory_client):
    def _create_asset(**overrides):
        response = inventory_client.post("/api/assets/", json=asset_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["data"]["asset_db_id"]
    return _create_asset


@pytest.fixture
def stored_asset(db_session):
    def _stored_asset(asset_db_id):
        db_session.expire_all()
        return db_session.query(Asset).filter(Asset.id == asset_db_id).first()
    return _stored_asset


def in_months(months: int, days: int = 0) -> date:
    return date.today() + relativedelta(months=months) + relativedelta(days=days)
