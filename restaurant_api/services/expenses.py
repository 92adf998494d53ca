"""Expense ledger service."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.logger import get_logger
from restaurant_api.models import Expense, RecurringFrequency
from restaurant_api.schemas.expense import ExpenseCreate, ExpenseUpdate
from restaurant_api.services.errors import InvalidRequest, NotFound
from restaurant_api.services.periods import resolve_range
from restaurant_api.services.recurrence import EXPENSE_HORIZON, compute_recurrence

logger = get_logger(__name__)

STOCK_EXPENSE_TYPE = "stock"
WASTAGE_EXPENSE_TYPE = "Wastage"


def apply_recurrence(
    expense: Expense,
    is_recurring: bool,
    frequency: RecurringFrequency | str | None,
    *,
    base: date | None = None,
    periods_ahead: int = EXPENSE_HORIZON,
) -> None:
    """Set or clear the recurring fields of expense.

    Raises:
        InvalidRequest: is_recurring is set without a frequency.
    """
    if is_recurring and frequency is None:
        raise InvalidRequest("Recurring expenses need a recurring_frequency")
    if not is_recurring:
        expense.is_recurring = False
        expense.recurring_frequency = None
        expense.recurring_next_due_date = None
        expense.recurring_end_date = None
        return

    recurrence = compute_recurrence(base or expense.expense_date, frequency, periods_ahead)
    expense.is_recurring = True
    expense.recurring_frequency = RecurringFrequency(frequency)
    expense.recurring_next_due_date = recurrence.next_due_date
    expense.recurring_end_date = recurrence.end_date


def _apply_fields(expense: Expense, data: ExpenseCreate | ExpenseUpdate) -> None:
    expense.type = data.type
    expense.amount = data.amount
    expense.description = data.description
    expense.expense_date = data.expense_date or date.today()
    apply_recurrence(expense, data.is_recurring, data.recurring_frequency)


async def record_expense(
    db: AsyncSession,
    *,
    type: str,
    amount: Decimal,
    description: str | None = None,
    expense_date: date | None = None,
    recurring_frequency: RecurringFrequency | str | None = None,
    periods_ahead: int = EXPENSE_HORIZON,
) -> Expense:
    """Add an expense written by another workflow (stock purchase, wastage)."""
    expense = Expense(
        type=type,
        amount=amount,
        description=description,
        expense_date=expense_date or date.today(),
    )
    apply_recurrence(
        expense,
        recurring_frequency is not None,
        recurring_frequency,
        periods_ahead=periods_ahead,
    )
    db.add(expense)
    await db.flush()
    return expense


async def create_expense(db: AsyncSession, data: ExpenseCreate) -> Expense:
    expense = Expense()
    _apply_fields(expense, data)
    db.add(expense)
    await db.flush()
    await db.refresh(expense)
    logger.info(
        "Expense recorded",
        expense_id=expense.id,
        type=expense.type,
        is_recurring=expense.is_recurring,
    )
    return expense


async def list_expenses(db: AsyncSession, start: str | None = None, end: str | None = None) -> list[Expense]:
    """All expenses, optionally limited to an inclusive expense_date range."""
    date_range = resolve_range(start, end)
    query = (
        select(Expense)
        .where(*date_range.clauses(Expense.expense_date))
        .order_by(Expense.expense_date.desc(), Expense.id.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_expense(db: AsyncSession, expense_id: int) -> Expense:
    expense = await db.get(Expense, expense_id)
    if expense is None:
        raise NotFound("Expense entry not found")
    return expense


async def update_expense(db: AsyncSession, expense_id: int, data: ExpenseUpdate) -> Expense:
    """Full update; recurring dates are recomputed from the new expense date."""
    expense = await get_expense(db, expense_id)
    _apply_fields(expense, data)
    await db.flush()
    await db.refresh(expense)
    return expense


async def delete_expense(db: AsyncSession, expense_id: int) -> None:
    expense = await get_expense(db, expense_id)
    await db.delete(expense)
    await db.flush()

