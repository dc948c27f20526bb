from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.models.business_settings import BusinessSettings
from app.services.business_settings_service import get_business_settings, upsert_business_settings


def test_defaults_to_zero_without_a_row(db, owner):
    settings = get_business_settings(db, owner.id)
    assert settings.fixed_costs == 0
    assert settings.average_selling_price == 0
    assert db.query(BusinessSettings).count() == 0


def test_upsert_twice_keeps_one_row(db, owner):
    upsert_business_settings(db, owner.id, fixed_costs="1000000", average_selling_price="25000")
    saved = upsert_business_settings(db, owner.id, fixed_costs="5000000", average_selling_price="50000")

    assert db.query(BusinessSettings).filter(BusinessSettings.user_id == owner.id).count() == 1
    assert saved.fixed_costs == Decimal("5000000")
    assert saved.average_selling_price == Decimal("50000")
    assert saved.target_profit == Decimal("0")


def test_negative_values_are_rejected(db, owner):
    with pytest.raises(ValidationError):
        upsert_business_settings(db, owner.id, fixed_costs="-1")
    assert db.query(BusinessSettings).count() == 0


def test_settings_api(client, owner):
    params = {"user_id": owner.id}

    empty = client.get("/api/v1/business-settings", params=params)
    assert empty.status_code == 200
    assert Decimal(empty.json()["fixed_costs"]) == 0

    saved = client.put(
        "/api/v1/business-settings",
        params=params,
        json={"fixed_costs": "5000000", "target_profit": "1000000", "average_selling_price": "50000"},
    )
    assert saved.status_code == 200
    assert Decimal(saved.json()["target_profit"]) == Decimal("1000000")

    again = client.get("/api/v1/business-settings", params=params).json()
    assert Decimal(again["average_selling_price"]) == Decimal("50000")

    rejected = client.put("/api/v1/business-settings", params=params, json={"fixed_costs": "-10"})
    assert rejected.status_code == 400
