import pytest


@pytest.fixture
def params(owner):
    return {"user_id": owner.id}


def test_list_filtered_by_kind(client, params):
    expense = client.get("/api/v1/categories", params={**params, "kind": "expense"}).json()
    assert [c["name"] for c in expense["categories"]] == ["Marketing", "Operational"]

    assert client.get("/api/v1/categories", params={**params, "kind": "refund"}).status_code == 400


def test_create_and_update(client, params):
    created = client.post(
        "/api/v1/categories",
        params=params,
        json={"name": "Packaging", "kind": "expense", "color": "#123ABC"},
    )
    assert created.status_code == 201
    category = created.json()
    assert category["kind"] == "expense"

    renamed = client.put(
        f"/api/v1/categories/{category['id']}",
        params=params,
        json={"name": "Packaging & Labels"},
    )
    assert renamed.status_code == 200
    assert renamed.json()["color"] == "#123ABC"

    # unused, so the kind may change
    switched = client.put(f"/api/v1/categories/{category['id']}", params=params, json={"kind": "income"})
    assert switched.status_code == 200
    assert switched.json()["kind"] == "income"


def test_invalid_color_is_rejected(client, params):
    response = client.post(
        "/api/v1/categories",
        params=params,
        json={"name": "Bad", "kind": "income", "color": "green"},
    )
    assert response.status_code == 400


def test_kind_change_blocked_while_in_use(client, params, category_ids):
    client.post(
        "/api/v1/transactions",
        params=params,
        json={
            "kind": "expense",
            "amount": "90000",
            "description": "Listrik",
            "occurred_at": "2026-03-03T12:00:00",
            "category_id": category_ids["Operational"],
        },
    )
    response = client.put(
        f"/api/v1/categories/{category_ids['Operational']}",
        params=params,
        json={"kind": "income"},
    )
    assert response.status_code == 400


def test_delete_leaves_transactions_uncategorized(client, params, category_ids):
    tx = client.post(
        "/api/v1/transactions",
        params=params,
        json={
            "kind": "expense",
            "amount": "90000",
            "description": "Iklan",
            "occurred_at": "2026-03-03T12:00:00",
            "category_id": category_ids["Marketing"],
        },
    ).json()

    response = client.delete(f"/api/v1/categories/{category_ids['Marketing']}", params=params)
    assert response.status_code == 200

    kept = client.get(f"/api/v1/transactions/{tx['id']}", params=params).json()
    assert kept["category_id"] is None

    distribution = client.get(
        "/api/v1/reports/category-distribution",
        params={**params, "kind": "expense", "start": "2026-03-01T00:00:00", "end": "2026-04-01T00:00:00"},
    ).json()
    assert [b["name"] for b in distribution["buckets"]] == ["Uncategorized"]


def test_categories_are_owner_scoped(client, category_ids, other_owner):
    response = client.put(
        f"/api/v1/categories/{category_ids['Sales']}",
        params={"user_id": other_owner.id},
        json={"name": "Mine now"},
    )
    assert response.status_code == 404
    assert client.delete(
        f"/api/v1/categories/{category_ids['Sales']}", params={"user_id": other_owner.id}
    ).status_code == 404
