from decimal import Decimal

import pytest

MARCH = {"start": "2026-03-01T00:00:00", "end": "2026-04-01T00:00:00"}


@pytest.fixture
def params(owner):
    return {"user_id": owner.id}


@pytest.fixture
def march_book(client, params, category_ids):
    """Income 100000 + 25000 and expense 40000 in March 2026, plus one February sale."""
    rows = [
        ("income", "100000", "2026-03-02T10:00:00", "Sales"),
        ("expense", "40000", "2026-03-05T10:00:00", "Operational"),
        ("income", "25000", "2026-03-31T23:59:59", "Services"),
        ("income", "70000", "2026-02-20T10:00:00", "Sales"),
    ]
    for kind, amount, occurred_at, category in rows:
        response = client.post(
            "/api/v1/transactions",
            params=params,
            json={
                "kind": kind,
                "amount": amount,
                "description": f"{category} {amount}",
                "occurred_at": occurred_at,
                "category_id": category_ids[category],
            },
        )
        assert response.status_code == 201


@pytest.fixture
def business(client, params):
    client.put(
        "/api/v1/business-settings",
        params=params,
        json={"fixed_costs": "5000000", "target_profit": "1000000", "average_selling_price": "50000"},
    )


def get(client, path, **query):
    response = client.get(f"/api/v1/reports/{path}", params=query)
    assert response.status_code == 200, response.text
    return response.json()


def test_financial_summary(client, params, march_book):
    body = get(client, "financial-summary", **params, **MARCH)
    assert Decimal(body["total_income"]) == Decimal("125000")
    assert Decimal(body["total_expense"]) == Decimal("40000")
    assert Decimal(body["net_profit"]) == Decimal("85000")
    assert body["transaction_count"] == 3


def test_named_period(client, params, march_book):
    body = get(client, "financial-summary", **params, period="last-month", reference_date="2026-03-15")
    assert Decimal(body["total_income"]) == Decimal("70000")
    assert body["transaction_count"] == 1


def test_empty_range_gives_zeros(client, params, march_book):
    body = get(client, "financial-summary", **params, start="2025-01-01T00:00:00", end="2025-02-01T00:00:00")
    assert Decimal(body["net_profit"]) == 0
    assert body["transaction_count"] == 0


@pytest.mark.parametrize("query", [
    {},
    {"start": "2026-03-01T00:00:00"},
    {"start": "2026-04-01T00:00:00", "end": "2026-03-01T00:00:00"},
    {"period": "forever"},
    {"period": "current-month", "start": "2026-03-01T00:00:00"},
])
def test_invalid_ranges_are_rejected(client, params, query):
    response = client.get("/api/v1/reports/financial-summary", params={**params, **query})
    assert response.status_code == 400


def test_reports_are_owner_scoped(client, march_book, other_owner):
    body = get(client, "financial-summary", user_id=other_owner.id, **MARCH)
    assert body["transaction_count"] == 0


def test_category_distribution(client, params, march_book):
    body = get(client, "category-distribution", **params, kind="income", **MARCH)
    assert Decimal(body["total"]) == Decimal("125000")
    assert [(b["name"], Decimal(b["percentage"])) for b in body["buckets"]] == [
        ("Sales", Decimal("80")),
        ("Services", Decimal("20")),
    ]


def test_monthly_trend(client, params, march_book):
    body = get(client, "monthly-trend", **params, months=3, reference_date="2026-03-15")
    months = body["months"]
    assert [m["month"] for m in months] == ["2026-01", "2026-02", "2026-03"]
    assert Decimal(months[1]["income"]) == Decimal("70000")
    assert Decimal(months[2]["net"]) == Decimal("85000")
    assert months[0]["transaction_count"] == 0

    too_long = client.get("/api/v1/reports/monthly-trend", params={**params, "months": 25})
    assert too_long.status_code == 400


def test_break_even_from_income_transactions(client, params, march_book, business):
    body = get(client, "break-even", **params, **MARCH)
    assert body["unit_basis"] == "income_transactions"
    assert body["unit_count"] == 2
    assert Decimal(body["variable_cost_per_unit"]) == Decimal("20000")
    assert body["break_even_units"] == 167
    assert Decimal(body["break_even_revenue"]) == Decimal("8350000")
    assert body["target_profit_units"] == 200
    assert Decimal(body["target_profit_revenue"]) == Decimal("10000000")


def test_break_even_with_explicit_units(client, params, march_book, business):
    body = get(client, "break-even", **params, units=4, **MARCH)
    assert body["unit_basis"] == "explicit"
    assert Decimal(body["variable_cost_per_unit"]) == Decimal("10000")
    assert body["break_even_units"] == 125
    assert Decimal(body["break_even_revenue"]) == Decimal("6250000")


def test_break_even_unreachable(client, params, march_book, business):
    body = get(client, "break-even", **params, variable_cost_per_unit="60000", **MARCH)
    assert body["unit_basis"] == "variable_cost_override"
    assert body["unreachable"] is True
    assert body["break_even_units"] == 0


def test_break_even_without_settings(client, params, march_book):
    body = get(client, "break-even", **params, **MARCH)
    assert body["unreachable"] is True
    assert Decimal(body["fixed_costs"]) == 0


def test_ratios(client, params, march_book, business):
    body = get(client, "ratios", **params, **MARCH)
    assert Decimal(body["profit_margin"]) == Decimal("68")
    assert Decimal(body["cost_ratio"]) == Decimal("32")
    assert Decimal(body["roi"]) == Decimal("212.5")
    assert Decimal(body["average_transaction_value"]) == Decimal("41666.67")
    assert Decimal(body["bep_progress"]) == Decimal("1.5")
    assert Decimal(body["remaining_revenue_to_bep"]) == Decimal("8225000")
    assert body["remaining_units_to_bep"] == 165


def test_ratios_on_empty_period(client, params, business):
    body = get(client, "ratios", **params, **MARCH)
    assert Decimal(body["profit_margin"]) == 0
    assert Decimal(body["roi"]) == 0
    assert Decimal(body["average_transaction_value"]) == 0


def test_category_distribution_requires_kind(client, params, march_book):
    response = client.get("/api/v1/reports/category-distribution", params={**params, **MARCH})
    assert response.status_code == 400


def test_category_distribution_never_mixes_kinds(client, params, march_book):
    body = get(client, "category-distribution", **params, kind="expense", **MARCH)
    assert body["kind"] == "expense"
    assert Decimal(body["total"]) == Decimal("40000")
    assert [(b["name"], Decimal(b["percentage"])) for b in body["buckets"]] == [("Operational", Decimal("100"))]
