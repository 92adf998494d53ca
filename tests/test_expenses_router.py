"""Integration tests for the expense ledger router."""

from datetime import date

import pytest

from tests.factories import ExpenseFactory


@pytest.mark.asyncio
async def test_create_monthly_recurring_expense(client):
    payload = {
        "type": "rent",
        "amount": "1200.00",
        "description": "Shop rent",
        "expense_date": "2024-01-10",
        "is_recurring": True,
        "recurring_frequency": "monthly",
    }
    response = await client.post("/api/expenses", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["amount"] == "1200.00"
    assert data["is_recurring"] is True
    assert data["recurring_next_due_date"] == "2024-02-10"
    assert data["recurring_end_date"] == "2024-03-10"


@pytest.mark.asyncio
async def test_recurring_without_frequency_is_bad_request(client):
    response = await client.post(
        "/api/expenses",
        json={"type": "repairs", "amount": "80.00", "expense_date": "2024-01-10", "is_recurring": True},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Recurring expenses need a recurring_frequency"}


@pytest.mark.asyncio
async def test_frequency_without_recurring_flag_is_one_off(client):
    response = await client.post(
        "/api/expenses",
        json={"type": "repairs", "amount": "80.00", "expense_date": "2024-01-10", "recurring_frequency": "weekly"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["is_recurring"] is False
    assert data["recurring_frequency"] is None
    assert data["recurring_next_due_date"] is None


@pytest.mark.asyncio
async def test_expense_date_defaults_to_today(client):
    response = await client.post("/api/expenses", json={"type": "misc", "amount": "5.00"})
    assert response.status_code == 201
    assert response.json()["expense_date"] == date.today().isoformat()


@pytest.mark.asyncio
async def test_unknown_frequency_is_bad_request(client):
    response = await client.post(
        "/api/expenses",
        json={"type": "rent", "amount": "10.00", "is_recurring": True, "recurring_frequency": "hourly"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_list_filters_by_inclusive_range(client, db):
    await ExpenseFactory.create_async(db, type="early", expense_date=date(2024, 1, 1))
    await ExpenseFactory.create_async(db, type="first", expense_date=date(2024, 2, 1))
    await ExpenseFactory.create_async(db, type="last", expense_date=date(2024, 2, 29))
    await ExpenseFactory.create_async(db, type="late", expense_date=date(2024, 3, 1))
    await db.commit()

    response = await client.get("/api/expenses", params={"start": "2024-02-01", "end": "2024-02-29"})

    assert response.status_code == 200
    assert [row["type"] for row in response.json()] == ["last", "first"]


@pytest.mark.asyncio
async def test_list_rejects_bad_range(client):
    response = await client.get("/api/expenses", params={"start": "2024-03-01", "end": "2024-02-01"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid range: start date is after end date"


@pytest.mark.asyncio
async def test_update_recomputes_recurrence(client, db):
    expense = await ExpenseFactory.create_async(db, expense_date=date(2024, 1, 10))
    await db.commit()

    response = await client.put(
        f"/api/expenses/{expense.id}",
        json={
            "type": "utilities",
            "amount": "45.00",
            "expense_date": "2024-05-31",
            "is_recurring": True,
            "recurring_frequency": "weekly",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["amount"] == "45.00"
    assert data["recurring_next_due_date"] == "2024-06-07"
    assert data["recurring_end_date"] == "2024-06-14"


@pytest.mark.asyncio
async def test_update_missing_expense(client):
    response = await client.put("/api/expenses/999", json={"type": "x", "amount": "1.00"})
    assert response.status_code == 404
    assert response.json() == {"error": "Expense entry not found"}


@pytest.mark.asyncio
async def test_delete_expense(client, db):
    expense = await ExpenseFactory.create_async(db)
    await db.commit()

    response = await client.delete(f"/api/expenses/{expense.id}")
    assert response.status_code == 200
    assert response.json()["success"] is True

    again = await client.delete(f"/api/expenses/{expense.id}")
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_requires_token(public_client):
    response = await public_client.get("/api/expenses")
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}
