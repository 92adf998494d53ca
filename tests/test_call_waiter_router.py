"""Integration tests for guests calling a waiter."""

import pytest

from tests.factories import CallWaiterRequestFactory, DiningTableFactory


@pytest.mark.asyncio
async def test_guest_calls_waiter(public_client, client, db):
    await DiningTableFactory.create_async(db, table_number=3)
    await db.commit()

    response = await public_client.post("/api/call-waiter", json={"table_number": 3})
    assert response.status_code == 201
    assert response.json()["table_number"] == 3

    listed = await client.get("/api/call-waiter")
    assert listed.status_code == 200
    assert [r["table_number"] for r in listed.json()] == [3]


@pytest.mark.asyncio
async def test_unknown_table_rejected(public_client):
    response = await public_client.post("/api/call-waiter", json={"table_number": 12})
    assert response.status_code == 400
    assert response.json() == {"error": "Table 12 does not exist"}


@pytest.mark.asyncio
async def test_disabled_in_footer(public_client, client, db):
    await DiningTableFactory.create_async(db, table_number=1)
    await db.commit()

    switched_off = await client.put("/api/footer", json={"features": {"call_waiter_enabled": False}})
    assert switched_off.status_code == 200

    response = await public_client.post("/api/call-waiter", json={"table_number": 1})
    assert response.status_code == 400
    assert response.json() == {"error": "Calling a waiter is disabled"}


@pytest.mark.asyncio
async def test_listing_and_clearing_need_token(public_client):
    assert (await public_client.get("/api/call-waiter")).status_code == 401
    assert (await public_client.delete("/api/call-waiter/1")).status_code == 401
    assert (await public_client.delete("/api/call-waiter")).status_code == 401


@pytest.mark.asyncio
async def test_clear_requests(client, db):
    await DiningTableFactory.create_async(db, table_number=1)
    first = await CallWaiterRequestFactory.create_async(db, table_number=1)
    await CallWaiterRequestFactory.create_async(db, table_number=1)
    await db.commit()

    response = await client.delete(f"/api/call-waiter/{first.id}")
    assert response.status_code == 200
    assert response.json()["id"] == first.id

    missing = await client.delete(f"/api/call-waiter/{first.id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Request not found"}

    assert len((await client.get("/api/call-waiter")).json()) == 1
    assert (await client.delete("/api/call-waiter")).status_code == 200
    assert (await client.get("/api/call-waiter")).json() == []
