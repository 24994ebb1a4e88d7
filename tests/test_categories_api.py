import pytest

from inventory_service.app.models.asset_management.categories import CATEGORY_MODELS, HardwareType


def test_add_and_list_category(inventory_client):
    for value in ("Networking", "  Accounts  ", "HR"):
        response = inventory_client.post("/api/categories/department", json={"value": value})
        assert response.status_code == 201

    data = inventory_client.get("/api/categories/department").json()["data"]

    assert [c["value"] for c in data] == ["Accounts", "HR", "Networking"]


def test_add_returns_id_and_trimmed_value(inventory_client):
    data = inventory_client.post("/api/categories/vendor", json={"value": " Dell "}).json()["data"]

    assert isinstance(data["id"], int)
    assert data["value"] == "Dell"


def test_hardware_type_uses_its_own_columns(inventory_client, db_session):
    inventory_client.post("/api/categories/hardware_type", json={"value": "Laptop"})

    row = db_session.query(HardwareType).one()
    assert row.type_name == "Laptop"
    data = inventory_client.get("/api/categories/hardware_type").json()["data"]
    assert data == [{"id": row.type_id, "value": "Laptop"}]


def test_duplicate_category_in_any_case_conflicts(inventory_client):
    inventory_client.post("/api/categories/building", json={"value": "Main Block"})

    response = inventory_client.post("/api/categories/building", json={"value": "MAIN block"})

    assert response.status_code == 409
    assert response.json()["message"] == "Category already exists"


def test_same_value_allowed_in_different_categories(inventory_client):
    assert inventory_client.post("/api/categories/section", json={"value": "Ops"}).status_code == 201
    assert inventory_client.post("/api/categories/cadre", json={"value": "Ops"}).status_code == 201


def test_empty_value_is_rejected(inventory_client):
    response = inventory_client.post("/api/categories/model", json={"value": "   "})

    assert response.status_code == 400


@pytest.mark.parametrize("method, path", [
    ("get", "/api/categories/user"),
    ("post", "/api/categories/assets"),
    ("delete", "/api/categories/user/1"),
])
def test_unknown_category_is_rejected(inventory_client, method, path):
    kwargs = {"json": {"value": "x"}} if method == "post" else {}

    response = getattr(inventory_client, method)(path, **kwargs)

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid category"


def test_delete_category(inventory_client):
    created = inventory_client.post("/api/categories/operational_status", json={"value": "active"}).json()["data"]

    response = inventory_client.delete(f"/api/categories/operational_status/{created['id']}")

    assert response.status_code == 200
    assert inventory_client.get("/api/categories/operational_status").json()["data"] == []


def test_delete_missing_category(inventory_client):
    response = inventory_client.delete("/api/categories/disposition_status/42")

    assert response.status_code == 404


def test_every_category_key_is_usable(inventory_client):
    for key in CATEGORY_MODELS:
        assert inventory_client.post(f"/api/categories/{key}", json={"value": "Sample"}).status_code == 201
        assert len(inventory_client.get(f"/api/categories/{key}").json()["data"]) == 1
