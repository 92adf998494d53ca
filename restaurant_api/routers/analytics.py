"""Analytics API router: period aggregates over paid orders and expenses."""

from fastapi import APIRouter, Query

from restaurant_api.deps import CurrentAdminId, DbSession, SessionMaker
from restaurant_api.logger import get_logger
from restaurant_api.schemas import (
    CountPeriod,
    CustomerCountRow,
    ExpenseRow,
    HeatmapRow,
    HeatmapType,
    NetProfitRow,
    OrderTrendRow,
    PopularItemRow,
    RevenueRow,
    TrendGroup,
)
from restaurant_api.services import InvalidRequest, aggregation
from restaurant_api.services.periods import Granularity
from restaurant_api.utils.exceptions import raise_bad_request

router = APIRouter(prefix="/api/analytics", tags=["analytics"])
logger = get_logger(__name__)

_DATE_HELP = "YYYY-MM-DD (daily), YYYY-MM (monthly) or YYYY (yearly)"


@router.get("/revenue", response_model=list[RevenueRow])
async def get_revenue(
    db: DbSession,
    _: CurrentAdminId,
    period: Granularity = Query(Granularity.DAILY),
    date: str | None = Query(None, description=_DATE_HELP),
    start: str | None = Query(None, description="YYYY-MM-DD"),
    end: str | None = Query(None, description="YYYY-MM-DD, inclusive"),
) -> list[dict]:
    """Paid-order revenue per period, most recent first."""
    try:
        return await aggregation.revenue_by_period(db, period, date=date, start=start, end=end)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)


@router.get("/expenses", response_model=list[ExpenseRow])
async def get_expenses(
    db: DbSession,
    _: CurrentAdminId,
    period: Granularity = Query(Granularity.DAILY),
    date: str | None = Query(None, description=_DATE_HELP),
    start: str | None = Query(None, description="YYYY-MM-DD"),
    end: str | None = Query(None, description="YYYY-MM-DD, inclusive"),
) -> list[dict]:
    """Expense totals per period, most recent first."""
    try:
        return await aggregation.expenses_by_period(db, period, date=date, start=start, end=end)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)


@router.get("/net", response_model=list[NetProfitRow])
async def get_net_profit(
    sessionmaker: SessionMaker,
    _: CurrentAdminId,
    period: Granularity = Query(Granularity.DAILY),
    date: str | None = Query(None, description=_DATE_HELP),
    start: str | None = Query(None, description="YYYY-MM-DD"),
    end: str | None = Query(None, description="YYYY-MM-DD, inclusive"),
) -> list[dict]:
    """Revenue, expenses and net per period over the union of both."""
    try:
        return await aggregation.net_profit_by_period(sessionmaker, period, date=date, start=start, end=end)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)


@router.get("/popular-items", response_model=list[PopularItemRow])
async def get_popular_items(
    db: DbSession,
    _: CurrentAdminId,
    limit: int = Query(5, ge=1, le=100),
) -> list[dict]:
    """Best sellers by quantity on paid orders."""
    return await aggregation.popular_items(db, limit)


@router.get("/order-trends", response_model=list[OrderTrendRow])
async def get_order_trends(
    db: DbSession,
    _: CurrentAdminId,
    start: str | None = Query(None, description="YYYY-MM-DD"),
    end: str | None = Query(None, description="YYYY-MM-DD, inclusive"),
    group: TrendGroup = Query(TrendGroup.MONTH),
) -> list[dict]:
    try:
        return await aggregation.order_trends(db, group=group.value, start=start, end=end)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)


@router.get("/customer-count", response_model=list[CustomerCountRow])
async def get_customer_count(
    db: DbSession,
    _: CurrentAdminId,
    start: str | None = Query(None, description="YYYY-MM-DD"),
    end: str | None = Query(None, description="YYYY-MM-DD, inclusive"),
    period: CountPeriod = Query(CountPeriod.DAY),
) -> list[dict]:
    """Number of paid orders per period."""
    try:
        return await aggregation.customer_count(db, period=period.value, start=start, end=end)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)


@router.get(
    "/revenue-heatmap",
    response_model=list[HeatmapRow],
    response_model_exclude_none=True,
)
async def get_revenue_heatmap(
    db: DbSession,
    _: CurrentAdminId,
    start: str | None = Query(None, description="YYYY-MM-DD"),
    end: str | None = Query(None, description="YYYY-MM-DD, inclusive"),
    type: HeatmapType = Query(HeatmapType.HOURLY),
) -> list[dict]:
    try:
        return await aggregation.revenue_heatmap(db, type=type.value, start=start, end=end)
    except InvalidRequest as exc:
        raise_bad_request(str(exc), cause=exc)
