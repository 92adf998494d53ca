"""Assemble the period report used by on-demand and scheduled emails."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from decimal import Decimal
from typing import Any, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from restaurant_api.logger import async_log_timing, get_logger
from restaurant_api.models import Expense, Item, Order, OrderItem, OrderStatus
from restaurant_api.services.errors import DependencyFailure, InvalidRequest
from restaurant_api.services.periods import DateWindow, Granularity, resolve_date_filter

logger = get_logger(__name__)

T = TypeVar("T")

REPORT_PERIODS = (Granularity.DAILY, Granularity.MONTHLY, Granularity.YEARLY)


def validate_report_request(period: str | None, date: str | None) -> tuple[Granularity, DateWindow]:
    """Check period and date before any query; returns the selected window."""
    if not period or not date:
        raise InvalidRequest("Missing required fields")
    try:
        granularity = Granularity(period)
    except ValueError as exc:
        raise InvalidRequest(f"Invalid period: {period}") from exc
    if granularity not in REPORT_PERIODS:
        raise InvalidRequest(f"Invalid period: {period}")

    window = resolve_date_filter(granularity, date)
    if window is None:
        raise InvalidRequest("Missing required fields")
    return granularity, window


async def _revenue(db: AsyncSession, window: DateWindow) -> Decimal:
    stmt = (
        select(func.coalesce(func.sum(Order.total), 0))
        .where(Order.status == OrderStatus.PAID)
        .where(*window.clauses(Order.created_at))
    )
    return Decimal(str(await db.scalar(stmt) or 0))


async def _expenses(db: AsyncSession, window: DateWindow) -> Decimal:
    stmt = select(func.coalesce(func.sum(Expense.amount), 0)).where(*window.clauses(Expense.expense_date))
    return Decimal(str(await db.scalar(stmt) or 0))


async def _items(db: AsyncSession, window: DateWindow) -> list[dict[str, Any]]:
    quantity = func.sum(OrderItem.quantity)
    line_total = func.sum(OrderItem.quantity * OrderItem.price)
    stmt = (
        select(Item.name, quantity.label("quantity"), line_total.label("total"))
        .join(Order, OrderItem.order_id == Order.id)
        .join(Item, OrderItem.item_id == Item.id)
        .where(Order.status == OrderStatus.PAID)
        .where(*window.clauses(Order.created_at))
        .group_by(Item.id, Item.name)
        .order_by(Item.name)
    )
    result = await db.execute(stmt)
    return [
        {
            "name": row.name,
            "quantity": int(row.quantity),
            "total": Decimal(str(row.total or 0)).quantize(Decimal("0.01")),
        }
        for row in result.all()
    ]


async def get_report(
    sessionmaker: async_sessionmaker[AsyncSession],
    period: str | None,
    date: str | None,
) -> dict[str, Any]:
    """Revenue, expenses and itemized sales for one day, month or year.

    The three queries run concurrently, each on its own session. Missing
    aggregates come back as 0.

    Raises:
        InvalidRequest: period or date missing or malformed (no query runs).
        DependencyFailure: any of the queries failed.
    """
    granularity, window = validate_report_request(period, date)

    async def _run(query: Callable[[AsyncSession, DateWindow], Awaitable[T]]) -> T:
        async with sessionmaker() as session:
            return await query(session, window)

    async with async_log_timing("assemble_report", logger=logger, period=granularity.value, date=date):
        try:
            revenue, expenses, items = await asyncio.gather(
                _run(_revenue),
                _run(_expenses),
                _run(_items),
            )
        except SQLAlchemyError as exc:
            logger.error(
                "Report query failed",
                period=granularity.value,
                date=date,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise DependencyFailure("Report query failed") from exc

    revenue = revenue.quantize(Decimal("0.01"))
    expenses = expenses.quantize(Decimal("0.01"))
    return {
        "period": granularity.value,
        "date": date,
        "items": items,
        "revenue": revenue,
        "expenses": expenses,
        "profit": revenue - expenses,
    }
