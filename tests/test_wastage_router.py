"""Integration tests for wastage records and their linked expenses."""

from decimal import Decimal

import pytest
from sqlalchemy import select

from restaurant_api.models import Expense
from tests.factories import ItemFactory


@pytest.fixture
async def salmon(db):
    item = await ItemFactory.create_async(db, name="Salmon", price=Decimal("4.00"))
    await db.commit()
    return item


async def _expenses(db) -> list[Expense]:
    result = await db.execute(select(Expense).execution_options(populate_existing=True))
    return list(result.scalars().all())


@pytest.mark.asyncio
async def test_create_values_at_item_price(client, db, admin, salmon):
    response = await client.post(
        "/api/wastage", json={"item_id": salmon.id, "quantity": 2, "reason": "Past use-by date"}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["item_name"] == "Salmon"
    assert data["created_by"] == admin.id
    assert data["username"] == "owner"

    [expense] = await _expenses(db)
    assert expense.id == data["expense_id"]
    assert expense.type == "Wastage"
    assert expense.amount == Decimal("8.00")
    assert expense.description == "Past use-by date"


@pytest.mark.asyncio
async def test_update_revalues_linked_expense(client, db, salmon):
    created = (await client.post("/api/wastage", json={"item_id": salmon.id, "quantity": 2})).json()

    response = await client.put(f"/api/wastage/{created['id']}", json={"quantity": 5, "reason": "Freezer failure"})

    assert response.status_code == 200
    assert response.json()["quantity"] == 5
    [expense] = await _expenses(db)
    assert expense.amount == Decimal("20.00")
    assert expense.description == "Freezer failure"


@pytest.mark.asyncio
async def test_delete_removes_linked_expense(client, db, salmon):
    created = (await client.post("/api/wastage", json={"item_id": salmon.id, "quantity": 1})).json()

    response = await client.delete(f"/api/wastage/{created['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Wastage and associated expense deleted successfully"
    assert await _expenses(db) == []
    assert (await client.get("/api/wastage")).json() == []


@pytest.mark.asyncio
async def test_unknown_item(client):
    response = await client.post("/api/wastage", json={"item_id": 999, "quantity": 1})
    assert response.status_code == 404
    assert response.json() == {"error": "Item not found"}


@pytest.mark.asyncio
async def test_missing_record(client):
    response = await client.put("/api/wastage/999", json={"quantity": 1})
    assert response.status_code == 404
    assert response.json() == {"error": "Wastage record not found"}


@pytest.mark.asyncio
async def test_quantity_must_be_positive(client, salmon):
    response = await client.post("/api/wastage", json={"item_id": salmon.id, "quantity": 0})
    assert response.status_code == 400
