"""Pydantic schemas for period reports."""

from decimal import Decimal

from pydantic import BaseModel


class ReportItem(BaseModel):
    name: str
    quantity: int
    total: Decimal


class ReportResponse(BaseModel):
    """Assembled report; missing aggregates are 0, never null."""

    period: str
    date: str
    items: list[ReportItem]
    revenue: Decimal
    expenses: Decimal
    profit: Decimal


class SendReportRequest(BaseModel):
    """Fields are checked in the handler so a missing one yields a single message."""

    period: str | None = None
    date: str | None = None
    email: str | None = None


class SendReportResponse(BaseModel):
    message: str
