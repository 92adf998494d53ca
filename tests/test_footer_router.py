"""Integration tests for the public site footer."""

import pytest


@pytest.mark.asyncio
async def test_default_footer(public_client):
    response = await public_client.get("/api/footer")
    assert response.status_code == 200
    assert response.json() == {
        "social": [],
        "contact": {"phone": [], "email": []},
        "location": {"address": []},
        "features": {"call_waiter_enabled": True},
    }


@pytest.mark.asyncio
async def test_replace_footer(client, public_client):
    payload = {
        "social": [
            {"label": "instagram", "value": "https://instagram.com/trattoria", "display_name": "Instagram"},
            {"label": "facebook", "value": "https://facebook.com/trattoria"},
            {"label": "  ", "value": "dropped"},
        ],
        "contact": {"phone": ["+44 20 7946 0000", " "], "email": ["hello@trattoria.example"]},
        "location": {"address": ["1 High Street, London"]},
        "features": {"call_waiter_enabled": False},
    }
    response = await client.put("/api/footer", json=payload)
    assert response.status_code == 200

    footer = (await public_client.get("/api/footer")).json()
    assert footer == response.json()
    assert footer["social"] == [
        {"label": "instagram", "value": "https://instagram.com/trattoria", "display_name": "Instagram"},
        {"label": "facebook", "value": "https://facebook.com/trattoria", "display_name": "facebook"},
    ]
    assert footer["contact"] == {"phone": ["+44 20 7946 0000"], "email": ["hello@trattoria.example"]}
    assert footer["location"] == {"address": ["1 High Street, London"]}
    assert footer["features"] == {"call_waiter_enabled": False}


@pytest.mark.asyncio
async def test_replace_clears_omitted_sections(client):
    await client.put(
        "/api/footer",
        json={"social": [{"label": "x", "value": "https://x.com/trattoria"}], "location": {"address": ["Old Road"]}},
    )
    response = await client.put("/api/footer", json={"contact": {"phone": ["0123"]}})
    assert response.status_code == 200
    assert response.json()["social"] == []
    assert response.json()["location"] == {"address": []}
    assert response.json()["contact"]["phone"] == ["0123"]


@pytest.mark.asyncio
async def test_empty_footer_rejected(client):
    response = await client.put("/api/footer", json={"social": [{"label": "", "value": ""}]})
    assert response.status_code == 400
    assert response.json() == {"error": "No valid settings provided"}


@pytest.mark.asyncio
async def test_footer_write_needs_token(public_client):
    response = await public_client.put("/api/footer", json={"contact": {"phone": ["0123"]}})
    assert response.status_code == 401
