"""Pydantic schemas for analytics endpoints."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class TrendGroup(str, Enum):
    MONTH = "month"
    YEAR = "year"


class CountPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class HeatmapType(str, Enum):
    HOURLY = "hourly"
    WEEKLY = "weekly"


class RevenueRow(BaseModel):
    period: str
    revenue: Decimal


class ExpenseRow(BaseModel):
    period: str
    expenses: Decimal


class NetProfitRow(BaseModel):
    period: str
    revenue: Decimal
    expenses: Decimal
    net: Decimal


class PopularItemRow(BaseModel):
    item_id: int
    item_name: str
    sold: int


class OrderTrendRow(BaseModel):
    period: str
    order_count: int
    net_revenue: Decimal


class CustomerCountRow(BaseModel):
    """customer_count is the number of paid orders in the period."""

    period: str
    customer_count: int


class HeatmapRow(BaseModel):
    """Exactly one of hour (0-23) or weekday (1=Mon..7=Sun) is set."""

    hour: int | None = None
    weekday: int | None = None
    revenue: Decimal
    orders: int
