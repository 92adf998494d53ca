"""Wastage records and their mirrored expenses."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.logger import get_logger
from restaurant_api.models import Admin, Expense, Item, Wastage
from restaurant_api.schemas.inventory import WastageCreate, WastageUpdate
from restaurant_api.services.errors import NotFound
from restaurant_api.services.expenses import WASTAGE_EXPENSE_TYPE, record_expense

logger = get_logger(__name__)


def _wastage_view(wastage: Wastage, item_name: str, username: str | None) -> dict[str, Any]:
    return {
        "id": wastage.id,
        "item_id": wastage.item_id,
        "item_name": item_name,
        "quantity": wastage.quantity,
        "reason": wastage.reason,
        "created_by": wastage.created_by,
        "username": username,
        "expense_id": wastage.expense_id,
        "created_at": wastage.created_at,
    }


def _value(item: Item, quantity: int) -> Decimal:
    return (item.price * quantity).quantize(Decimal("0.01"))


async def _get_item(db: AsyncSession, item_id: int) -> Item:
    item = await db.get(Item, item_id)
    if item is None:
        raise NotFound("Item not found")
    return item


async def _get_wastage(db: AsyncSession, wastage_id: int) -> Wastage:
    wastage = await db.get(Wastage, wastage_id)
    if wastage is None:
        raise NotFound("Wastage record not found")
    return wastage


async def _get_view(db: AsyncSession, wastage_id: int) -> dict[str, Any]:
    result = await db.execute(
        select(Wastage, Item.name, Admin.username)
        .join(Item, Wastage.item_id == Item.id)
        .outerjoin(Admin, Wastage.created_by == Admin.id)
        .where(Wastage.id == wastage_id)
    )
    wastage, item_name, username = result.one()
    return _wastage_view(wastage, item_name, username)


async def create_wastage(db: AsyncSession, data: WastageCreate, admin_id: int) -> dict[str, Any]:
    """Record wasted stock, valued at item price x quantity, with a linked "Wastage" expense."""
    item = await _get_item(db, data.item_id)
    expense = await record_expense(
        db,
        type=WASTAGE_EXPENSE_TYPE,
        amount=_value(item, data.quantity),
        description=data.reason,
    )
    wastage = Wastage(
        item_id=item.id,
        quantity=data.quantity,
        reason=data.reason,
        created_by=admin_id,
        expense_id=expense.id,
    )
    db.add(wastage)
    await db.flush()
    logger.info(
        "Wastage recorded",
        wastage_id=wastage.id,
        item_id=item.id,
        quantity=wastage.quantity,
        expense_id=expense.id,
    )
    return await _get_view(db, wastage.id)


async def list_wastage(db: AsyncSession) -> list[dict[str, Any]]:
    result = await db.execute(
        select(Wastage, Item.name, Admin.username)
        .join(Item, Wastage.item_id == Item.id)
        .outerjoin(Admin, Wastage.created_by == Admin.id)
        .order_by(Wastage.created_at.desc(), Wastage.id.desc())
    )
    return [_wastage_view(wastage, item_name, username) for wastage, item_name, username in result.all()]


async def update_wastage(db: AsyncSession, wastage_id: int, data: WastageUpdate) -> dict[str, Any]:
    """Change quantity/reason and revalue the linked expense.

    The expense is recreated when the original one has been deleted.
    """
    wastage = await _get_wastage(db, wastage_id)
    item = await _get_item(db, wastage.item_id)
    amount = _value(item, data.quantity)

    wastage.quantity = data.quantity
    wastage.reason = data.reason

    expense = await db.get(Expense, wastage.expense_id) if wastage.expense_id else None
    if expense is None:
        expense = await record_expense(db, type=WASTAGE_EXPENSE_TYPE, amount=amount, description=data.reason)
        wastage.expense_id = expense.id
    else:
        expense.amount = amount
        expense.description = data.reason

    await db.flush()
    return await _get_view(db, wastage.id)


async def delete_wastage(db: AsyncSession, wastage_id: int) -> None:
    """Delete the record together with its linked expense."""
    wastage = await _get_wastage(db, wastage_id)
    expense_id = wastage.expense_id

    await db.delete(wastage)
    await db.flush()

    if expense_id is not None:
        expense = await db.get(Expense, expense_id)
        if expense is not None:
            await db.delete(expense)
            await db.flush()
