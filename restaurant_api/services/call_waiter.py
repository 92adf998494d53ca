"""Guests calling a waiter to their table."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.logger import get_logger
from restaurant_api.models import CallWaiterRequest
from restaurant_api.services import footer, tables
from restaurant_api.services.errors import InvalidRequest, NotFound

logger = get_logger(__name__)


async def list_requests(db: AsyncSession) -> list[CallWaiterRequest]:
    """Open requests, oldest first."""
    result = await db.execute(
        select(CallWaiterRequest).order_by(CallWaiterRequest.created_at, CallWaiterRequest.id)
    )
    return list(result.scalars().all())


async def call_waiter(db: AsyncSession, table_number: int) -> CallWaiterRequest:
    """Raise a request for table_number.

    Raises:
        InvalidRequest: the feature is switched off or the table does not exist.
    """
    if not await footer.call_waiter_enabled(db):
        raise InvalidRequest("Calling a waiter is disabled")
    if not await tables.table_exists(db, table_number):
        raise InvalidRequest(f"Table {table_number} does not exist")

    request = CallWaiterRequest(table_number=table_number)
    db.add(request)
    await db.flush()
    await db.refresh(request)
    logger.info("Waiter called", call_id=request.id, table_number=table_number)
    return request


async def clear_request(db: AsyncSession, call_id: int) -> None:
    request = await db.get(CallWaiterRequest, call_id)
    if request is None:
        raise NotFound("Request not found")
    await db.delete(request)
    await db.flush()


async def clear_all_requests(db: AsyncSession) -> None:
    await db.execute(delete(CallWaiterRequest))
