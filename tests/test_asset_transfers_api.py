import pytest
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from conftest import bearer, token_for
from shared.core.auth import create_access_token
from shared.core.exceptions import ImmutableRecordError
from inventory_service.app.models.asset_management.asset_transfers import AssetTransfer
from inventory_service.app.models.asset_management.assets import Asset


def transfer_payload(asset_db_id, **overrides):
    payload = {
        "asset_id": asset_db_id,
        "new_owner_fullname": "Jane Doe",
        "new_cadre": "Finance",
        "new_department": "Accounts",
        "transfer_reason": "Team change",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def transfer(inventory_client, user_headers):
    def _transfer(asset_db_id, **overrides):
        response = inventory_client.post(
            "/api/asset-transfers/", json=transfer_payload(asset_db_id, **overrides), headers=user_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _transfer


# ---------------- create ----------------

def test_transfer_writes_one_ledger_row_and_updates_asset(
        inventory_client, create_asset, stored_asset, db_session, user_headers, regular_user):
    asset_db_id = create_asset()

    response = inventory_client.post(
        "/api/asset-transfers/",
        json=transfer_payload(asset_db_id, new_hostname="host-777"),
        headers=user_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["asset_id"] == asset_db_id
    assert data["asset_serial_number"] == "SN-0001"
    assert data["new_owner_fullname"] == "Jane Doe"
    assert data["transferred_by_email"] == regular_user.email

    rows = db_session.query(AssetTransfer).all()
    assert len(rows) == 1
    record = rows[0]
    assert record.id == data["transfer_id"]
    assert record.previous_owner_fullname == "John Smith"
    assert record.previous_hostname == "host-001"
    assert record.transferred_by_user_id == regular_user.id
    assert record.transfer_date is not None

    asset = stored_asset(asset_db_id)
    for field in ("owner_fullname", "hostname", "p_number", "cadre", "department", "section", "building"):
        assert getattr(asset, field) == getattr(record, f"new_{field}")
    assert asset.hostname == "host-777"


def test_transfer_carries_forward_omitted_optional_fields(create_asset, stored_asset, transfer, db_session):
    asset_db_id = create_asset()

    transfer(asset_db_id, new_section="   ")

    record = db_session.query(AssetTransfer).one()
    assert record.new_hostname == "host-001"
    assert record.new_p_number == "P-100"
    assert record.new_section == "Infrastructure"
    assert record.new_building == "HQ"
    asset = stored_asset(asset_db_id)
    assert asset.owner_fullname == "Jane Doe"
    assert asset.section == "Infrastructure"


def test_transfer_requires_authentication(inventory_client, create_asset, db_session):
    asset_db_id = create_asset()

    response = inventory_client.post("/api/asset-transfers/", json=transfer_payload(asset_db_id))

    assert response.status_code == 401
    assert response.json()["status"] == "Failure"
    assert db_session.query(AssetTransfer).count() == 0


def test_transfer_rejects_invalid_token(inventory_client, create_asset):
    asset_db_id = create_asset()

    response = inventory_client.post(
        "/api/asset-transfers/", json=transfer_payload(asset_db_id), headers=bearer("not-a-token"))

    assert response.status_code == 401


def test_transfer_rejects_expired_token(inventory_client, create_asset, regular_user):
    asset_db_id = create_asset()
    token = create_access_token(
        {"user_id": regular_user.id, "email": regular_user.email, "role": regular_user.role},
        expires_minutes=-5)

    response = inventory_client.post(
        "/api/asset-transfers/", json=transfer_payload(asset_db_id), headers=bearer(token))

    assert response.status_code == 401


def test_transfer_by_blocked_user_is_forbidden(inventory_client, create_asset, make_user):
    asset_db_id = create_asset()
    blocked = make_user(email="blocked@company.com", status="blocked")

    response = inventory_client.post(
        "/api/asset-transfers/", json=transfer_payload(asset_db_id), headers=bearer(token_for(blocked)))

    assert response.status_code == 403


def test_transfer_missing_required_fields(inventory_client, create_asset, user_headers, stored_asset, db_session):
    asset_db_id = create_asset()

    response = inventory_client.post(
        "/api/asset-transfers/",
        json=transfer_payload(asset_db_id, new_cadre="", new_department=None),
        headers=user_headers)

    assert response.status_code == 400
    assert set(response.json()["data"]["missing_fields"]) == {"new_cadre", "new_department"}
    assert db_session.query(AssetTransfer).count() == 0
    assert stored_asset(asset_db_id).owner_fullname == "John Smith"


def test_transfer_unknown_asset(inventory_client, user_headers, db_session):
    response = inventory_client.post(
        "/api/asset-transfers/", json=transfer_payload(999), headers=user_headers)

    assert response.status_code == 404
    assert db_session.query(AssetTransfer).count() == 0


def test_failed_asset_write_rolls_back_ledger_row(
        inventory_client, create_asset, user_headers, stored_asset, db_session):
    asset_db_id = create_asset()

    def fail_asset_update(mapper, connection, target):
        raise SQLAlchemyError("asset write failed")

    event.listen(Asset, "before_update", fail_asset_update)
    try:
        response = inventory_client.post(
            "/api/asset-transfers/", json=transfer_payload(asset_db_id), headers=user_headers)
    finally:
        event.remove(Asset, "before_update", fail_asset_update)

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to transfer asset"
    assert db_session.query(AssetTransfer).count() == 0
    assert stored_asset(asset_db_id).owner_fullname == "John Smith"


def test_asset_with_history_cannot_be_deleted(inventory_client, create_asset, transfer, db_session):
    asset_db_id = create_asset()
    transfer(asset_db_id)

    response = inventory_client.delete(f"/api/assets/{asset_db_id}")

    assert response.status_code == 409
    assert db_session.query(Asset).count() == 1
    assert db_session.query(AssetTransfer).count() == 1


# ---------------- ledger immutability ----------------

def test_ledger_rows_cannot_be_updated(create_asset, transfer, db_session):
    transfer(create_asset())
    record = db_session.query(AssetTransfer).one()

    record.transfer_reason = "rewritten"
    with pytest.raises(ImmutableRecordError):
        db_session.commit()
    db_session.rollback()

    assert db_session.query(AssetTransfer).one().transfer_reason == "Team change"


def test_ledger_rows_cannot_be_deleted(create_asset, transfer, db_session):
    transfer(create_asset())
    record = db_session.query(AssetTransfer).one()

    db_session.delete(record)
    with pytest.raises(ImmutableRecordError):
        db_session.commit()
    db_session.rollback()

    assert db_session.query(AssetTransfer).count() == 1


# ---------------- reads ----------------

def test_list_transfers_is_enriched(inventory_client, create_asset, transfer, regular_user):
    transfer(create_asset())

    body = inventory_client.get("/api/asset-transfers/all").json()["data"]

    assert body["total"] == 1
    assert body["page"] == 1
    assert body["limit"] == 50
    assert body["totalPages"] == 1
    row = body["data"][0]
    assert row["asset_identifier"] == "AST-001"
    assert row["hardware_type"] == "Laptop"
    assert row["vendor"] == "Dell"
    assert row["transferred_by_user_email"] == regular_user.email
    assert row["transferred_by_user_name"] == regular_user.name
    assert row["transferred_by_user_role"] == "user"


def test_transfer_without_actor_uses_system_identity(inventory_client, create_asset, db_session):
    asset_db_id = create_asset()
    db_session.add(AssetTransfer(
        asset_id=asset_db_id,
        new_owner_fullname="Jane Doe",
        new_cadre="Finance",
        new_department="Accounts",
        transfer_reason="Initial import",
    ))
    db_session.commit()

    row = inventory_client.get("/api/asset-transfers/all").json()["data"]["data"][0]

    assert row["transferred_by_user_email"] == "system@company.com"
    assert row["transferred_by_user_name"] == "System"
    assert row["transferred_by_user_role"] == "system"
    # falls back to the asset's current serial number
    assert row["asset_serial_number"] == "SN-0001"


def test_unknown_sort_key_falls_back_to_newest_first(inventory_client, create_asset, transfer):
    asset_db_id = create_asset()
    first = transfer(asset_db_id, new_owner_fullname="Aaron")
    second = transfer(asset_db_id, new_owner_fullname="Zed")

    body = inventory_client.get(
        "/api/asset-transfers/all", params={"sort_key": "password; DROP TABLE user"})

    assert body.status_code == 200
    ids = [r["id"] for r in body.json()["data"]["data"]]
    assert ids == [second["transfer_id"], first["transfer_id"]]


def test_sort_by_allowed_key(inventory_client, create_asset, transfer):
    asset_db_id = create_asset()
    transfer(asset_db_id, new_owner_fullname="Zed")
    transfer(asset_db_id, new_owner_fullname="Aaron")

    body = inventory_client.get(
        "/api/asset-transfers/all",
        params={"sort_key": "new_owner_fullname", "sort_direction": "asc"}).json()["data"]

    assert [r["new_owner_fullname"] for r in body["data"]] == ["Aaron", "Zed"]


def test_list_transfers_search_and_pagination(inventory_client, create_asset, transfer):
    first_asset = create_asset(serial_number="SN-1")
    second_asset = create_asset(serial_number="SN-2")
    for i in range(3):
        transfer(first_asset, new_owner_fullname=f"Owner {i}")
    transfer(second_asset, new_department="Logistics")

    searched = inventory_client.get(
        "/api/asset-transfers/all", params={"search": "logist"}).json()["data"]
    paged = inventory_client.get(
        "/api/asset-transfers/all", params={"asset_id": first_asset, "limit": 2, "page": 2}).json()["data"]

    assert searched["total"] == 1
    assert searched["data"][0]["asset_id"] == second_asset
    assert paged["total"] == 3
    assert paged["totalPages"] == 2
    assert len(paged["data"]) == 1


def test_asset_history(inventory_client, create_asset, transfer):
    asset_db_id = create_asset(serial_number="SN-1")
    other = create_asset(serial_number="SN-2")
    transfer(asset_db_id, new_owner_fullname="First")
    transfer(asset_db_id, new_owner_fullname="Second")
    transfer(other)

    body = inventory_client.get(f"/api/asset-transfers/asset-history/{asset_db_id}").json()["data"]

    assert body["total"] == 2
    assert [r["new_owner_fullname"] for r in body["data"]] == ["Second", "First"]
    assert body["data"][1]["previous_owner_fullname"] == "John Smith"
    assert body["data"][0]["previous_owner_fullname"] == "First"


def test_get_transfer_by_id(inventory_client, create_asset, transfer):
    created = transfer(create_asset())

    response = inventory_client.get(f"/api/asset-transfers/{created['transfer_id']}")

    assert response.status_code == 200
    assert response.json()["data"]["new_owner_fullname"] == "Jane Doe"


def test_get_missing_transfer(inventory_client):
    response = inventory_client.get("/api/asset-transfers/999")

    assert response.status_code == 404
    assert response.json()["message"] == "Transfer record not found"
