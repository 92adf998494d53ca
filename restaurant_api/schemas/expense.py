"""Pydantic schemas for expenses."""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field

from restaurant_api.models.expense import RecurringFrequency
from restaurant_api.schemas.base import BaseResponse


class ExpenseBase(BaseModel):
    """Fields an admin supplies on create and full update."""

    type: Annotated[str, Field(min_length=1, max_length=100)]
    amount: Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]
    description: Annotated[str | None, Field(None, max_length=500)] = None
    # Defaults to today when omitted
    expense_date: date | None = None
    is_recurring: bool = False
    recurring_frequency: RecurringFrequency | None = None


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(ExpenseBase):
    pass


class ExpenseResponse(BaseResponse):
    id: int
    type: str
    amount: Decimal
    description: str | None
    expense_date: date
    is_recurring: bool
    recurring_frequency: RecurringFrequency | None
    recurring_next_due_date: date | None
    recurring_end_date: date | None
    created_at: datetime
