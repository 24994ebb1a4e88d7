from inventory_service.app.data.category_insert import seed_categories
from inventory_service.app.models.asset_management.categories import (
    DispositionStatusCategory, OperationalStatusCategory)


def test_seed_categories_skips_existing_values(db_session):
    db_session.add(OperationalStatusCategory(name="Active"))
    db_session.commit()

    added = seed_categories(db_session)

    assert added == 6
    assert seed_categories(db_session) == 0
    assert db_session.query(OperationalStatusCategory).count() == 4
    assert db_session.query(DispositionStatusCategory).count() == 3
