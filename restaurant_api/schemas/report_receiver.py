"""Pydantic schemas for report receivers."""

from datetime import datetime

from pydantic import BaseModel

from restaurant_api.schemas.base import BaseResponse


class ReportReceiverWrite(BaseModel):
    """All fields are required on both create and update."""

    admin_id: int
    receive_daily: bool
    receive_monthly: bool
    receive_yearly: bool


class ReportReceiverResponse(BaseResponse):
    id: int
    admin_id: int
    receive_daily: bool
    receive_monthly: bool
    receive_yearly: bool
    username: str
    email: str | None
    created_at: datetime
    updated_at: datetime
