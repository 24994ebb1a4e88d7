from inventory_service.app.helpers.transfer_helper import effective_value, merge_assignment

CURRENT = {
    "owner_fullname": "John Smith",
    "hostname": "host-001",
    "p_number": "P-100",
    "cadre": "Engineering",
    "department": "IT",
    "section": "Infrastructure",
    "building": "HQ",
}


def test_effective_value_prefers_new():
    assert effective_value("new-host", "old-host") == "new-host"


def test_effective_value_falls_back_on_none_or_blank():
    assert effective_value(None, "old-host") == "old-host"
    assert effective_value("", "old-host") == "old-host"
    assert effective_value("   ", "old-host") == "old-host"


def test_effective_value_keeps_existing_none():
    assert effective_value(None, None) is None


def test_merge_carries_forward_optional_fields():
    requested = {"owner_fullname": "Jane Doe", "cadre": "Finance", "department": "Accounts"}

    merged = merge_assignment(requested, CURRENT)

    assert merged == {
        "owner_fullname": "Jane Doe",
        "hostname": "host-001",
        "p_number": "P-100",
        "cadre": "Finance",
        "department": "Accounts",
        "section": "Infrastructure",
        "building": "HQ",
    }


def test_merge_applies_supplied_optional_fields():
    requested = {
        "owner_fullname": "Jane Doe",
        "hostname": "host-777",
        "cadre": "Finance",
        "department": "Accounts",
        "building": "Annex",
    }

    merged = merge_assignment(requested, CURRENT)

    assert merged["hostname"] == "host-777"
    assert merged["building"] == "Annex"
    assert merged["p_number"] == "P-100"
    assert merged["section"] == "Infrastructure"


def test_merge_does_not_carry_forward_required_fields():
    merged = merge_assignment({}, CURRENT)

    assert merged["owner_fullname"] is None
    assert merged["cadre"] is None
    assert merged["department"] is None
