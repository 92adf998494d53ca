"""Expense ledger model."""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Enum, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_api.database import Base
from restaurant_api.models.base import IntIdMixin, TimestampMixin, enum_values


class RecurringFrequency(str, enum.Enum):
    """How often a recurring expense falls due."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Expense(IntIdMixin, TimestampMixin, Base):
    """
    A cost incurred by the restaurant.

    Rows are entered by admins or written automatically by stock purchases
    and wastage records. Recurring rows carry a computed next-due and end date.
    """

    __tablename__ = "expenses"

    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    expense_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurring_frequency: Mapped[RecurringFrequency | None] = mapped_column(
        Enum(RecurringFrequency, name="recurring_frequency_enum", values_callable=enum_values),
        nullable=True,
    )
    recurring_next_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    recurring_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<Expense {self.type} {self.amount} on {self.expense_date}>"
