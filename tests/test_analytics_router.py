"""Integration tests for the analytics router."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from restaurant_api.config import settings
from tests.factories import ExpenseFactory, ItemFactory, create_order


@pytest.fixture
async def activity(db):
    pizza = await ItemFactory.create_async(db, name="Pizza", price=Decimal("12.00"))
    soda = await ItemFactory.create_async(db, name="Soda", price=Decimal("2.00"))
    await create_order(db, [(pizza, 1), (soda, 2)], created_at=datetime(2024, 5, 6, 13, 15))
    await create_order(db, [(soda, 3)], created_at=datetime(2024, 5, 7, 20, 40))
    await ExpenseFactory.create_async(db, amount=Decimal("9.00"), expense_date=date(2024, 5, 7))
    await db.commit()
    return pizza, soda


@pytest.mark.asyncio
async def test_revenue(client, activity):
    response = await client.get("/api/analytics/revenue", params={"period": "daily"})
    assert response.status_code == 200
    assert response.json() == [
        {"period": "2024-05-07", "revenue": "6.00"},
        {"period": "2024-05-06", "revenue": "16.00"},
    ]


@pytest.mark.asyncio
async def test_expenses_monthly_filter(client, activity):
    response = await client.get("/api/analytics/expenses", params={"period": "monthly", "date": "2024-05"})
    assert response.json() == [{"period": "2024-05", "expenses": "9.00"}]


@pytest.mark.asyncio
async def test_net(client, activity):
    response = await client.get("/api/analytics/net", params={"period": "daily"})
    assert response.status_code == 200
    assert response.json() == [
        {"period": "2024-05-07", "revenue": "6.00", "expenses": "9.00", "net": "-3.00"},
        {"period": "2024-05-06", "revenue": "16.00", "expenses": "0.00", "net": "16.00"},
    ]


@pytest.mark.asyncio
async def test_popular_items(client, activity):
    pizza, soda = activity
    response = await client.get("/api/analytics/popular-items", params={"limit": 1})
    assert response.json() == [{"item_id": soda.id, "item_name": "Soda", "sold": 5}]


@pytest.mark.asyncio
async def test_order_trends_and_customer_count(client, activity):
    trends = await client.get("/api/analytics/order-trends", params={"group": "month"})
    assert trends.json() == [{"period": "2024-05", "order_count": 2, "net_revenue": "22.00"}]

    counts = await client.get("/api/analytics/customer-count", params={"period": "month"})
    assert counts.json() == [{"period": "2024-05", "customer_count": 2}]


@pytest.mark.asyncio
async def test_heatmap_shapes(client, activity):
    hourly = await client.get("/api/analytics/revenue-heatmap", params={"type": "hourly"})
    assert hourly.json() == [
        {"hour": 13, "revenue": "16.00", "orders": 1},
        {"hour": 20, "revenue": "6.00", "orders": 1},
    ]

    # 2024-05-06 is a Monday
    weekly = await client.get("/api/analytics/revenue-heatmap", params={"type": "weekly"})
    assert weekly.json() == [
        {"weekday": 1, "revenue": "16.00", "orders": 1},
        {"weekday": 2, "revenue": "6.00", "orders": 1},
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, params",
    [
        ("/api/analytics/revenue", {"period": "hourly"}),
        ("/api/analytics/revenue", {"period": "daily", "date": "2024-05"}),
        ("/api/analytics/net", {"period": "weekly", "date": "2024-05"}),
        ("/api/analytics/expenses", {"start": "yesterday"}),
        ("/api/analytics/popular-items", {"limit": 0}),
        ("/api/analytics/order-trends", {"group": "week"}),
        ("/api/analytics/customer-count", {"period": "year"}),
        ("/api/analytics/revenue-heatmap", {"type": "monthly"}),
    ],
)
async def test_bad_parameters_are_400(client, path, params):
    response = await client.get(path, params=params)
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_empty_month(client):
    response = await client.get("/api/analytics/revenue", params={"period": "monthly", "date": "2030-01"})
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, params, error",
    [
        ("/api/analytics/revenue", {"period": "monthly", "date": "0000-01"}, "Invalid date for monthly period"),
        ("/api/analytics/expenses", {"period": "monthly", "date": "9999-12"}, "Invalid date for monthly period"),
        ("/api/analytics/net", {"period": "daily", "date": "9999-12-31"}, "Invalid date for daily period"),
    ],
)
async def test_out_of_range_dates_are_400(client, path, params, error):
    response = await client.get(path, params=params)
    assert response.status_code == 400
    assert response.json() == {"error": error}


@pytest.mark.asyncio
async def test_net_listing_cap(client, activity, monkeypatch):
    monkeypatch.setattr(settings, "analytics_default_limit", 1)

    capped = await client.get("/api/analytics/net", params={"period": "daily"})
    assert [row["period"] for row in capped.json()] == ["2024-05-07"]

    ranged = await client.get(
        "/api/analytics/net", params={"period": "daily", "start": "2024-05-01", "end": "2024-05-31"}
    )
    assert [row["period"] for row in ranged.json()] == ["2024-05-07", "2024-05-06"]
