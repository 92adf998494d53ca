"""Stock purchases and current stock levels."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.logger import get_logger
from restaurant_api.models import Item, Order, OrderItem, OrderStatus, StockEntry, Wastage
from restaurant_api.schemas.inventory import StockCreate, StockUpdate
from restaurant_api.services.errors import NotFound
from restaurant_api.services.expenses import STOCK_EXPENSE_TYPE, record_expense
from restaurant_api.services.recurrence import STOCK_HORIZON

logger = get_logger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 5


def _stock_view(entry: StockEntry, item_name: str) -> dict[str, Any]:
    return {
        "id": entry.id,
        "item_id": entry.item_id,
        "item_name": item_name,
        "quantity": entry.quantity,
        "cost": entry.cost,
        "created_at": entry.created_at,
    }


def _total_cost(unit_cost: Decimal, quantity: int) -> Decimal:
    return (unit_cost * quantity).quantize(Decimal("0.01"))


async def _get_item(db: AsyncSession, item_id: int) -> Item:
    item = await db.get(Item, item_id)
    if item is None:
        raise NotFound("Item not found")
    return item


async def create_stock(db: AsyncSession, data: StockCreate) -> dict[str, Any]:
    """Record a purchase and log its total cost as a "stock" expense.

    A recurrence other than "none" makes the expense recurring, looking
    twelve periods ahead from today.
    """
    item = await _get_item(db, data.item_id)
    total = _total_cost(data.cost, data.quantity)

    entry = StockEntry(item_id=item.id, quantity=data.quantity, cost=total)
    db.add(entry)
    await db.flush()

    expense = await record_expense(
        db,
        type=STOCK_EXPENSE_TYPE,
        amount=total,
        description=f"Stock purchase: {item.name}",
        recurring_frequency=None if data.recurrence == "none" else data.recurrence,
        periods_ahead=STOCK_HORIZON,
    )
    await db.refresh(entry)
    logger.info(
        "Stock purchase recorded",
        stock_id=entry.id,
        item_id=item.id,
        quantity=entry.quantity,
        expense_id=expense.id,
    )
    return _stock_view(entry, item.name)


async def list_stock(db: AsyncSession) -> list[dict[str, Any]]:
    result = await db.execute(
        select(StockEntry, Item.name)
        .join(Item, StockEntry.item_id == Item.id)
        .order_by(StockEntry.created_at.desc(), StockEntry.id.desc())
    )
    return [_stock_view(entry, name) for entry, name in result.all()]


async def update_stock(db: AsyncSession, stock_id: int, data: StockUpdate) -> dict[str, Any]:
    entry = await db.get(StockEntry, stock_id)
    if entry is None:
        raise NotFound("Stock entry not found")
    item = await _get_item(db, data.item_id)

    entry.item_id = item.id
    entry.quantity = data.quantity
    entry.cost = _total_cost(data.cost, data.quantity)
    await db.flush()
    await db.refresh(entry)
    return _stock_view(entry, item.name)


async def delete_stock(db: AsyncSession, stock_id: int) -> None:
    entry = await db.get(StockEntry, stock_id)
    if entry is None:
        raise NotFound("Stock entry not found")
    await db.delete(entry)
    await db.flush()


def _stock_levels_query() -> tuple[Select, Any]:
    purchased = (
        select(StockEntry.item_id, func.sum(StockEntry.quantity).label("quantity"))
        .group_by(StockEntry.item_id)
        .subquery()
    )
    wasted = (
        select(Wastage.item_id, func.sum(Wastage.quantity).label("quantity"))
        .group_by(Wastage.item_id)
        .subquery()
    )
    sold = (
        select(OrderItem.item_id, func.sum(OrderItem.quantity).label("quantity"))
        .join(Order, OrderItem.order_id == Order.id)
        .where(Order.status == OrderStatus.PAID)
        .group_by(OrderItem.item_id)
        .subquery()
    )
    level = (
        func.coalesce(purchased.c.quantity, 0)
        - func.coalesce(wasted.c.quantity, 0)
        - func.coalesce(sold.c.quantity, 0)
    )
    stmt = (
        select(Item.id.label("item_id"), Item.name.label("item_name"), level.label("stock_level"))
        .join(purchased, purchased.c.item_id == Item.id)
        .outerjoin(wasted, wasted.c.item_id == Item.id)
        .outerjoin(sold, sold.c.item_id == Item.id)
        .order_by(Item.name)
    )
    return stmt, level


async def current_stock(db: AsyncSession) -> list[dict[str, Any]]:
    """Stock level per purchased item: purchased - wasted - sold on paid orders."""
    stmt, _ = _stock_levels_query()
    result = await db.execute(stmt)
    return [dict(row._mapping) for row in result.all()]


async def low_stock(db: AsyncSession, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[dict[str, Any]]:
    """Items whose stock level is strictly below threshold."""
    stmt, level = _stock_levels_query()
    result = await db.execute(stmt.where(level < threshold))
    return [dict(row._mapping) for row in result.all()]
