"""Integration tests for report receiver management."""

import pytest

from tests.factories import AdminFactory


def _payload(admin_id: int, **flags) -> dict:
    return {
        "admin_id": admin_id,
        "receive_daily": flags.get("daily", False),
        "receive_monthly": flags.get("monthly", False),
        "receive_yearly": flags.get("yearly", False),
    }


@pytest.mark.asyncio
async def test_create_and_list(client, admin):
    response = await client.post("/api/report-receivers", json=_payload(admin.id, daily=True))

    assert response.status_code == 201
    data = response.json()
    assert data["receive_daily"] is True
    assert data["username"] == "owner"
    assert data["email"] == "owner@example.com"

    listing = await client.get("/api/report-receivers")
    assert [row["admin_id"] for row in listing.json()] == [admin.id]


@pytest.mark.asyncio
async def test_one_receiver_per_admin(client, admin):
    await client.post("/api/report-receivers", json=_payload(admin.id, daily=True))
    response = await client.post("/api/report-receivers", json=_payload(admin.id, monthly=True))

    assert response.status_code == 400
    assert response.json()["error"] == f"Receiver already exists for admin_id: {admin.id}"


@pytest.mark.asyncio
async def test_unknown_admin(client):
    response = await client.post("/api/report-receivers", json=_payload(4242))
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid admin_id: 4242 does not exist in admins table"


@pytest.mark.asyncio
async def test_all_flags_required(client, admin):
    response = await client.post("/api/report-receivers", json={"admin_id": admin.id, "receive_daily": True})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_and_conflict(client, db, admin):
    other = await AdminFactory.create_async(db, username="manager")
    await db.commit()
    mine = (await client.post("/api/report-receivers", json=_payload(admin.id))).json()
    await client.post("/api/report-receivers", json=_payload(other.id))

    updated = await client.put(f"/api/report-receivers/{mine['id']}", json=_payload(admin.id, yearly=True))
    assert updated.status_code == 200
    assert updated.json()["receive_yearly"] is True

    conflict = await client.put(f"/api/report-receivers/{mine['id']}", json=_payload(other.id))
    assert conflict.status_code == 400
    assert conflict.json()["error"] == f"Another receiver already exists for admin_id: {other.id}"


@pytest.mark.asyncio
async def test_missing_receiver(client, admin):
    response = await client.put("/api/report-receivers/999", json=_payload(admin.id))
    assert response.status_code == 404
    assert response.json() == {"error": "Receiver with id 999 not found"}

    deleted = await client.delete("/api/report-receivers/999")
    assert deleted.status_code == 404


@pytest.mark.asyncio
async def test_delete(client, admin):
    created = (await client.post("/api/report-receivers", json=_payload(admin.id))).json()

    response = await client.delete(f"/api/report-receivers/{created['id']}")

    assert response.status_code == 200
    assert (await client.get("/api/report-receivers")).json() == []


@pytest.mark.asyncio
async def test_receiver_follows_admin_email_change(client, admin):
    await client.post("/api/report-receivers", json=_payload(admin.id, monthly=True))

    await client.put(f"/api/admins/{admin.id}", json={"email": "accounts@example.com"})

    listing = await client.get("/api/report-receivers")
    assert [row["email"] for row in listing.json()] == ["accounts@example.com"]
