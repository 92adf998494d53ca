"""Integration tests for the report endpoints."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from restaurant_api.services import mailer
from restaurant_api.services.errors import DependencyFailure
from tests.factories import ItemFactory, create_order


@pytest.fixture
def send_mock(monkeypatch):
    mock = AsyncMock()
    monkeypatch.setattr(mailer, "send_report_email", mock)
    return mock


@pytest.fixture
async def sales(db):
    tea = await ItemFactory.create_async(db, name="Tea", price=Decimal("1.50"))
    await create_order(db, [(tea, 4)], created_at=datetime(2024, 6, 3, 9, 0))
    await db.commit()


@pytest.mark.asyncio
async def test_get_report(client, sales):
    response = await client.get("/api/report", params={"period": "daily", "date": "2024-06-03"})

    assert response.status_code == 200
    assert response.json() == {
        "period": "daily",
        "date": "2024-06-03",
        "items": [{"name": "Tea", "quantity": 4, "total": "6.00"}],
        "revenue": "6.00",
        "expenses": "0.00",
        "profit": "6.00",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params, error",
    [
        ({"period": "weekly", "date": "2024"}, "Invalid period: weekly"),
        ({"period": "yearly", "date": "2024-06"}, "Invalid date for yearly period"),
        ({"period": "monthly", "date": "9999-12"}, "Invalid date for monthly period"),
        ({"period": "daily", "date": "9999-12-31"}, "Invalid date for daily period"),
    ],
)
async def test_get_report_bad_request(client, params, error):
    response = await client.get("/api/report", params=params)
    assert response.status_code == 400
    assert response.json() == {"error": error}


@pytest.mark.asyncio
async def test_get_report_missing_date(client):
    response = await client.get("/api/report", params={"period": "daily"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_send_report(client, sales, send_mock):
    response = await client.post(
        "/api/send-report", json={"period": "monthly", "date": "2024-06", "email": "boss@example.com"}
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Report sent successfully!"}
    recipients, subject, body, attachment, filename = send_mock.await_args.args
    assert recipients == ["boss@example.com"]
    assert subject == "Monthly Report - 2024-06"
    assert body == "Here is your monthly restaurant report."
    assert attachment.startswith(b"%PDF")
    assert filename == "report-monthly-2024-06.pdf"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{"period": "daily", "date": "2024-06-03"}, {"date": "2024-06-03", "email": "a@b.c"}, {}],
)
async def test_send_report_requires_fields(client, send_mock, payload):
    response = await client.post("/api/send-report", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Period, date, and email are required"}
    send_mock.assert_not_awaited()


@pytest.mark.asyncio
async def test_send_report_mail_failure(client, send_mock):
    send_mock.side_effect = DependencyFailure("Email delivery failed")
    response = await client.post(
        "/api/send-report", json={"period": "daily", "date": "2024-06-03", "email": "boss@example.com"}
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to send report"}


@pytest.mark.asyncio
async def test_health(public_client):
    response = await public_client.get("/health")
    assert response.status_code == 200
    assert response.json()["checks"] == {"database": True}
