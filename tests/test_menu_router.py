"""Integration tests for menu categories and items."""

import pytest


@pytest.mark.asyncio
async def test_menu_reads_are_public(client, public_client):
    category = (await client.post("/api/menu", json={"name": "Mains"})).json()
    created = await client.post(
        "/api/items", json={"name": "Lasagne", "price": "11.50", "category_id": category["id"]}
    )
    assert created.status_code == 201

    menu = await public_client.get("/api/menu")
    assert [row["name"] for row in menu.json()] == ["Mains"]

    items = await public_client.get("/api/items", params={"category_id": category["id"]})
    assert [(row["name"], row["price"]) for row in items.json()] == [("Lasagne", "11.50")]


@pytest.mark.asyncio
async def test_writes_need_token(public_client):
    response = await public_client.post("/api/menu", json={"name": "Desserts"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_item_with_unknown_category(client):
    response = await client.post("/api/items", json={"name": "Ghost", "price": "1.00", "category_id": 77})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid category_id: Category does not exist"}


@pytest.mark.asyncio
async def test_update_and_delete_item(client):
    item = (await client.post("/api/items", json={"name": "Soup", "price": "4.00"})).json()

    updated = await client.put(f"/api/items/{item['id']}", json={"price": "4.50"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Soup"
    assert updated.json()["price"] == "4.50"

    assert (await client.delete(f"/api/items/{item['id']}")).status_code == 200
    missing = await client.get(f"/api/items/{item['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Item not found"}


@pytest.mark.asyncio
async def test_blank_category_name(client):
    response = await client.post("/api/menu", json={"name": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "Category name is required"}


@pytest.mark.asyncio
async def test_items_basic_listing(client, public_client):
    category = (await client.post("/api/menu", json={"name": "Pizza"})).json()
    await client.post(
        "/api/items",
        json={"name": "Margherita", "price": "9.00", "category_id": category["id"], "image": "margherita.jpg"},
    )

    response = await public_client.get("/api/items/basic")
    assert response.status_code == 200
    assert response.json() == [
        {"id": response.json()[0]["id"], "name": "Margherita", "category_id": category["id"], "price": "9.00"}
    ]
