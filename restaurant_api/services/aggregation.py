"""Period aggregates over paid orders and expenses."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from restaurant_api.config import settings
from restaurant_api.logger import get_logger
from restaurant_api.models import Expense, Item, Order, OrderItem, OrderStatus
from restaurant_api.services.errors import DependencyFailure, InvalidRequest
from restaurant_api.services.periods import (
    DateRange,
    DateWindow,
    Granularity,
    hour_of_day,
    iso_weekday,
    period_key,
    resolve_date_filter,
    resolve_range,
)

logger = get_logger(__name__)

ZERO = Decimal("0.00")

_TREND_GROUPS = {"month": Granularity.MONTHLY, "year": Granularity.YEARLY}
_COUNT_PERIODS = {"day": Granularity.DAILY, "week": Granularity.WEEKLY, "month": Granularity.MONTHLY}
_HEATMAP_TYPES = ("hourly", "weekly")


def _quantize_money(amount: Decimal | int | float | None) -> Decimal:
    if amount is None:
        return ZERO
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(Decimal("0.01"))


def _granularity(value: Granularity | str) -> Granularity:
    try:
        return Granularity(value)
    except ValueError as exc:
        raise InvalidRequest(f"Invalid period: {value}") from exc


@dataclass(frozen=True)
class PeriodQuery:
    """Validated grouping + filter for a listing aggregate."""

    granularity: Granularity
    window: DateWindow | None = None
    date_range: DateRange = field(default_factory=DateRange)

    @property
    def filtered(self) -> bool:
        return self.window is not None or not self.date_range.is_open

    def clauses(self, column: Any) -> list[Any]:
        clauses = self.window.clauses(column) if self.window else []
        return clauses + self.date_range.clauses(column)


def build_period_query(
    period: Granularity | str = Granularity.DAILY,
    date: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> PeriodQuery:
    """Validate period/date/range parameters before any query runs."""
    granularity = _granularity(period)
    return PeriodQuery(
        granularity=granularity,
        window=resolve_date_filter(granularity, date),
        date_range=resolve_range(start, end),
    )


async def _fetch(db: AsyncSession, stmt: Select, operation: str) -> list[Any]:
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as exc:
        logger.error(
            "Aggregate query failed",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise DependencyFailure(f"{operation} query failed") from exc
    return list(result.all())


def _listing(stmt: Select, key: Any, query: PeriodQuery, limit: int | None) -> Select:
    stmt = stmt.group_by(key).order_by(key.desc())
    if limit is not None and not query.filtered:
        stmt = stmt.limit(limit)
    return stmt


def _revenue_stmt(query: PeriodQuery) -> tuple[Select, Any]:
    key = period_key(Order.created_at, query.granularity)
    stmt = (
        select(key.label("period"), func.sum(Order.total).label("revenue"))
        .where(Order.status == OrderStatus.PAID)
        .where(*query.clauses(Order.created_at))
    )
    return stmt, key


def _expense_stmt(query: PeriodQuery) -> tuple[Select, Any]:
    key = period_key(Expense.expense_date, query.granularity)
    stmt = select(key.label("period"), func.sum(Expense.amount).label("expenses")).where(
        *query.clauses(Expense.expense_date)
    )
    return stmt, key


async def fetch_revenue(db: AsyncSession, query: PeriodQuery, *, limit: int | None = None) -> list[dict[str, Any]]:
    stmt, key = _revenue_stmt(query)
    rows = await _fetch(db, _listing(stmt, key, query, limit), "revenue")
    return [{"period": row.period, "revenue": _quantize_money(row.revenue)} for row in rows]


async def fetch_expenses(db: AsyncSession, query: PeriodQuery, *, limit: int | None = None) -> list[dict[str, Any]]:
    stmt, key = _expense_stmt(query)
    rows = await _fetch(db, _listing(stmt, key, query, limit), "expenses")
    return [{"period": row.period, "expenses": _quantize_money(row.expenses)} for row in rows]


async def revenue_by_period(
    db: AsyncSession,
    period: Granularity | str = Granularity.DAILY,
    *,
    date: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> list[dict[str, Any]]:
    """Paid-order revenue per period, most recent first."""
    query = build_period_query(period, date, start, end)
    return await fetch_revenue(db, query, limit=settings.analytics_default_limit)


async def expenses_by_period(
    db: AsyncSession,
    period: Granularity | str = Granularity.DAILY,
    *,
    date: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> list[dict[str, Any]]:
    """Expense totals per period, most recent first."""
    query = build_period_query(period, date, start, end)
    return await fetch_expenses(db, query, limit=settings.analytics_default_limit)


def merge_net_profit(
    revenue_rows: Iterable[dict[str, Any]],
    expense_rows: Iterable[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Join revenue and expense rows on period label, defaulting the missing side to 0.

    Result is ordered most recent period first.
    """
    merged: dict[str, dict[str, Decimal]] = {}
    for row in revenue_rows:
        merged.setdefault(row["period"], {"revenue": ZERO, "expenses": ZERO})["revenue"] = _quantize_money(
            row["revenue"]
        )
    for row in expense_rows:
        merged.setdefault(row["period"], {"revenue": ZERO, "expenses": ZERO})["expenses"] = _quantize_money(
            row["expenses"]
        )

    return [
        {
            "period": period,
            "revenue": values["revenue"],
            "expenses": values["expenses"],
            "net": values["revenue"] - values["expenses"],
        }
        for period, values in sorted(merged.items(), key=lambda item: item[0], reverse=True)
    ]


async def net_profit_by_period(
    sessionmaker: async_sessionmaker[AsyncSession],
    period: Granularity | str = Granularity.DAILY,
    *,
    date: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> list[dict[str, Any]]:
    """Revenue minus expenses per period; both sides are queried concurrently."""
    query = build_period_query(period, date, start, end)

    async def _revenue() -> list[dict[str, Any]]:
        async with sessionmaker() as session:
            return await fetch_revenue(session, query)

    async def _expenses() -> list[dict[str, Any]]:
        async with sessionmaker() as session:
            return await fetch_expenses(session, query)

    revenue_rows, expense_rows = await asyncio.gather(_revenue(), _expenses())
    merged = merge_net_profit(revenue_rows, expense_rows)
    if not query.filtered:
        merged = merged[: settings.analytics_default_limit]
    return merged


async def popular_items(db: AsyncSession, limit: int = 5) -> list[dict[str, Any]]:
    """Best-selling items by quantity on paid orders."""
    if limit < 1:
        raise InvalidRequest("limit must be a positive integer")

    sold = func.sum(OrderItem.quantity)
    stmt = (
        select(OrderItem.item_id, Item.name.label("item_name"), sold.label("sold"))
        .join(Item, OrderItem.item_id == Item.id)
        .join(Order, OrderItem.order_id == Order.id)
        .where(Order.status == OrderStatus.PAID)
        .group_by(OrderItem.item_id, Item.name)
        .order_by(sold.desc())
        .limit(limit)
    )
    rows = await _fetch(db, stmt, "popular_items")
    return [{"item_id": row.item_id, "item_name": row.item_name, "sold": int(row.sold)} for row in rows]


async def order_trends(
    db: AsyncSession,
    *,
    group: str = "month",
    start: str | None = None,
    end: str | None = None,
) -> list[dict[str, Any]]:
    """Paid order count and revenue per month or year, chronological."""
    date_range = resolve_range(start, end)
    if group not in _TREND_GROUPS:
        raise InvalidRequest("Invalid group param")

    key = period_key(Order.created_at, _TREND_GROUPS[group])
    stmt = (
        select(
            key.label("period"),
            func.count(Order.id).label("order_count"),
            func.sum(Order.total).label("net_revenue"),
        )
        .where(Order.status == OrderStatus.PAID)
        .where(*date_range.clauses(Order.created_at))
        .group_by(key)
        .order_by(key)
    )
    rows = await _fetch(db, stmt, "order_trends")
    return [
        {
            "period": row.period,
            "order_count": int(row.order_count),
            "net_revenue": _quantize_money(row.net_revenue),
        }
        for row in rows
    ]


async def customer_count(
    db: AsyncSession,
    *,
    period: str = "day",
    start: str | None = None,
    end: str | None = None,
) -> list[dict[str, Any]]:
    """Paid orders per day/week/month, chronological.

    Counts orders, not distinct customers: the ordering flow records no
    customer identity, so one paid order stands in for one customer.
    """
    date_range = resolve_range(start, end)
    if period not in _COUNT_PERIODS:
        raise InvalidRequest("Invalid period param")

    key = period_key(Order.created_at, _COUNT_PERIODS[period])
    stmt = (
        select(key.label("period"), func.count(Order.id).label("customer_count"))
        .where(Order.status == OrderStatus.PAID)
        .where(*date_range.clauses(Order.created_at))
        .group_by(key)
        .order_by(key)
    )
    rows = await _fetch(db, stmt, "customer_count")
    return [{"period": row.period, "customer_count": int(row.customer_count)} for row in rows]


async def revenue_heatmap(
    db: AsyncSession,
    *,
    type: str = "hourly",
    start: str | None = None,
    end: str | None = None,
) -> list[dict[str, Any]]:
    """Paid revenue bucketed by hour of day (0-23) or ISO weekday (1-7).

    Buckets without orders are absent.
    """
    date_range = resolve_range(start, end)
    if type not in _HEATMAP_TYPES:
        raise InvalidRequest("Invalid type param")

    bucket_name = "hour" if type == "hourly" else "weekday"
    bucket = hour_of_day(Order.created_at) if type == "hourly" else iso_weekday(Order.created_at)
    stmt = (
        select(
            bucket.label(bucket_name),
            func.sum(Order.total).label("revenue"),
            func.count(Order.id).label("orders"),
        )
        .where(Order.status == OrderStatus.PAID)
        .where(*date_range.clauses(Order.created_at))
        .group_by(bucket)
        .order_by(bucket)
    )
    rows = await _fetch(db, stmt, "revenue_heatmap")
    return [
        {
            bucket_name: int(getattr(row, bucket_name)),
            "revenue": _quantize_money(row.revenue),
            "orders": int(row.orders),
        }
        for row in rows
    ]
