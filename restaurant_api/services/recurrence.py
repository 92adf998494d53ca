"""Next-due and end dates for recurring expenses."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from restaurant_api.models import RecurringFrequency
from restaurant_api.services.errors import InvalidRequest

# Expenses entered by hand look two periods ahead, stock purchases a year of periods.
EXPENSE_HORIZON = 2
STOCK_HORIZON = 12


@dataclass(frozen=True)
class Recurrence:
    next_due_date: date
    end_date: date

    def as_strings(self) -> dict[str, str]:
        return {
            "recurring_next_due_date": self.next_due_date.isoformat(),
            "recurring_end_date": self.end_date.isoformat(),
        }


def _add_months(value: date, months: int) -> date:
    year = value.year + (value.month - 1 + months) // 12
    month = (value.month - 1 + months) % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _parse_frequency(frequency: RecurringFrequency | str) -> RecurringFrequency:
    try:
        return RecurringFrequency(frequency)
    except ValueError as exc:
        raise InvalidRequest(f"Invalid recurring frequency: {frequency}") from exc


def advance(base: date, frequency: RecurringFrequency | str, steps: int = 1) -> date:
    """Move base forward by steps whole periods of frequency.

    Month and year steps are computed from base, not chained, so 31 Jan + 2
    months is 31 Mar rather than 28/29 Mar.
    """
    freq = _parse_frequency(frequency)
    if freq == RecurringFrequency.DAILY:
        return base + timedelta(days=steps)
    if freq == RecurringFrequency.WEEKLY:
        return base + timedelta(weeks=steps)
    if freq == RecurringFrequency.MONTHLY:
        return _add_months(base, steps)
    return _add_months(base, 12 * steps)


def compute_recurrence(
    base: date,
    frequency: RecurringFrequency | str,
    periods_ahead: int = EXPENSE_HORIZON,
) -> Recurrence:
    """Compute (next due date, end date) for a recurring expense.

    Callers choose the horizon. One period ahead is refused even though it
    is the smallest horizon a caller could ask for: it would make the end
    date equal to the next due date, and a recurring expense must end
    strictly after it falls due.

    Raises:
        InvalidRequest: unknown frequency, or a horizon shorter than two periods.
    """
    if periods_ahead < 2:
        raise InvalidRequest("periods_ahead must be at least 2")

    return Recurrence(
        next_due_date=advance(base, frequency, 1),
        end_date=advance(base, frequency, periods_ahead),
    )
