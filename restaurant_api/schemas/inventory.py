"""Pydantic schemas for stock purchases and wastage."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from restaurant_api.schemas.base import BaseResponse

StockRecurrence = Literal["none", "daily", "weekly", "monthly", "yearly"]


class StockBase(BaseModel):
    item_id: int
    quantity: Annotated[int, Field(gt=0)]
    # Unit cost; the stored cost is unit cost x quantity
    cost: Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]


class StockCreate(StockBase):
    """Stock purchase; also logged as a "stock" expense."""

    recurrence: StockRecurrence = "none"


class StockUpdate(StockBase):
    pass


class StockResponse(BaseResponse):
    id: int
    item_id: int
    item_name: str
    quantity: int
    cost: Decimal
    created_at: datetime


class StockLevelResponse(BaseModel):
    item_id: int
    item_name: str
    stock_level: int


class WastageCreate(BaseModel):
    item_id: int
    quantity: Annotated[int, Field(gt=0)]
    reason: Annotated[str | None, Field(None, max_length=500)] = None


class WastageUpdate(BaseModel):
    """Only quantity and reason are editable."""

    quantity: Annotated[int, Field(gt=0)]
    reason: Annotated[str | None, Field(None, max_length=500)] = None


class WastageResponse(BaseResponse):
    id: int
    item_id: int
    item_name: str
    quantity: int
    reason: str | None
    created_by: int | None
    username: str | None
    expense_id: int | None
    created_at: datetime
