"""Period grouping: label expressions, date validation and filter windows.

Each granularity is a closed enum member mapped to a compiled SQL construct,
so the grouping expression never contains caller-supplied text. Literal dates
only ever reach the database as bound parameters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import FunctionElement

from restaurant_api.services.errors import InvalidRequest


class Granularity(str, Enum):
    """Bucket size for period aggregates."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")
_YEAR_RE = re.compile(r"^\d{4}$")

END_OF_DAY = time(23, 59, 59)

# Year 9999 has no following period to close a window with.
MIN_FILTER_YEAR = 1
MAX_FILTER_YEAR = 9998


# =============================================================================
# SQL label constructs
# =============================================================================


class _PeriodLabel(FunctionElement):
    type = String()
    inherit_cache = True


class day_label(_PeriodLabel):
    """YYYY-MM-DD"""

    name = "day_label"


class week_label(_PeriodLabel):
    """YYYY-Www, zero-padded week number"""

    name = "week_label"


class month_label(_PeriodLabel):
    """YYYY-MM"""

    name = "month_label"


class year_label(_PeriodLabel):
    """YYYY"""

    name = "year_label"


class hour_of_day(FunctionElement):
    """0-23"""

    type = Integer()
    inherit_cache = True
    name = "hour_of_day"


class iso_weekday(FunctionElement):
    """1 = Monday ... 7 = Sunday"""

    type = Integer()
    inherit_cache = True
    name = "iso_weekday"


def _arg(element: FunctionElement, compiler: Any, **kw: Any) -> str:
    return compiler.process(element.clauses, **kw)


# PostgreSQL (default dialect)


@compiles(day_label)
def _pg_day_label(element, compiler, **kw):
    return f"to_char({_arg(element, compiler, **kw)}, 'YYYY-MM-DD')"


@compiles(week_label)
def _pg_week_label(element, compiler, **kw):
    return f"to_char({_arg(element, compiler, **kw)}, 'IYYY-\"W\"IW')"


@compiles(month_label)
def _pg_month_label(element, compiler, **kw):
    return f"to_char({_arg(element, compiler, **kw)}, 'YYYY-MM')"


@compiles(year_label)
def _pg_year_label(element, compiler, **kw):
    return f"to_char({_arg(element, compiler, **kw)}, 'YYYY')"


@compiles(hour_of_day)
def _pg_hour_of_day(element, compiler, **kw):
    return f"CAST(EXTRACT(HOUR FROM {_arg(element, compiler, **kw)}) AS INTEGER)"


@compiles(iso_weekday)
def _pg_iso_weekday(element, compiler, **kw):
    return f"CAST(EXTRACT(ISODOW FROM {_arg(element, compiler, **kw)}) AS INTEGER)"


# SQLite (local development and tests)


@compiles(day_label, "sqlite")
def _sqlite_day_label(element, compiler, **kw):
    return f"strftime('%Y-%m-%d', {_arg(element, compiler, **kw)})"


@compiles(week_label, "sqlite")
def _sqlite_week_label(element, compiler, **kw):
    # %W is the Monday-based week of year (00-53); close enough to ISO for buckets
    return f"strftime('%Y-W%W', {_arg(element, compiler, **kw)})"


@compiles(month_label, "sqlite")
def _sqlite_month_label(element, compiler, **kw):
    return f"strftime('%Y-%m', {_arg(element, compiler, **kw)})"


@compiles(year_label, "sqlite")
def _sqlite_year_label(element, compiler, **kw):
    return f"strftime('%Y', {_arg(element, compiler, **kw)})"


@compiles(hour_of_day, "sqlite")
def _sqlite_hour_of_day(element, compiler, **kw):
    return f"CAST(strftime('%H', {_arg(element, compiler, **kw)}) AS INTEGER)"


@compiles(iso_weekday, "sqlite")
def _sqlite_iso_weekday(element, compiler, **kw):
    return f"((CAST(strftime('%w', {_arg(element, compiler, **kw)}) AS INTEGER) + 6) % 7 + 1)"


_LABELS: dict[Granularity, type[_PeriodLabel]] = {
    Granularity.DAILY: day_label,
    Granularity.WEEKLY: week_label,
    Granularity.MONTHLY: month_label,
    Granularity.YEARLY: year_label,
}


def period_key(column: ColumnElement[Any], granularity: Granularity) -> ColumnElement[str]:
    """Grouping expression whose string value sorts chronologically."""
    return _LABELS[granularity](column)


# =============================================================================
# Date filters
# =============================================================================


def _is_timestamp(column: ColumnElement[Any]) -> bool:
    return isinstance(column.type, DateTime)


@dataclass(frozen=True)
class DateWindow:
    """Half-open [start, end) window covering one day, month or year."""

    start: date
    end: date

    def clauses(self, column: ColumnElement[Any]) -> list[ColumnElement[bool]]:
        if _is_timestamp(column):
            return [
                column >= datetime.combine(self.start, time.min),
                column < datetime.combine(self.end, time.min),
            ]
        return [column >= self.start, column < self.end]


@dataclass(frozen=True)
class DateRange:
    """Optional start/end bounds; end is inclusive through 23:59:59."""

    start: date | None = None
    end: date | None = None

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    def clauses(self, column: ColumnElement[Any]) -> list[ColumnElement[bool]]:
        timestamp = _is_timestamp(column)
        clauses: list[ColumnElement[bool]] = []
        if self.start is not None:
            clauses.append(column >= (datetime.combine(self.start, time.min) if timestamp else self.start))
        if self.end is not None:
            clauses.append(column <= (datetime.combine(self.end, END_OF_DAY) if timestamp else self.end))
        return clauses


def parse_day(value: str | None, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD calendar date."""
    if not isinstance(value, str) or not _DAY_RE.match(value):
        raise InvalidRequest(f"Invalid {field}: expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidRequest(f"Invalid {field}: {value} is not a calendar date") from exc


def _first_of_next_month(value: date) -> date:
    if value.month == 12:
        return date(value.year + 1, 1, 1)
    return date(value.year, value.month + 1, 1)


def _bounded_window(granularity: Granularity, start: date, end: date) -> DateWindow:
    if not MIN_FILTER_YEAR <= start.year <= MAX_FILTER_YEAR:
        raise ValueError(f"year {start.year} is outside the {granularity.value} filter range")
    return DateWindow(start, end)


def resolve_date_filter(granularity: Granularity, value: str | None) -> DateWindow | None:
    """Turn a single-date filter into the window it selects.

    daily expects YYYY-MM-DD, monthly YYYY-MM, yearly YYYY. Weekly periods
    cannot be filtered by a single date.
    """
    if value is None:
        return None

    if granularity == Granularity.DAILY:
        if not _DAY_RE.match(value):
            raise InvalidRequest("Invalid date for daily period")
        try:
            day = date.fromisoformat(value)
            return _bounded_window(granularity, day, day + timedelta(days=1))
        except (ValueError, OverflowError) as exc:
            raise InvalidRequest("Invalid date for daily period") from exc

    if granularity == Granularity.MONTHLY:
        if not _MONTH_RE.match(value):
            raise InvalidRequest("Invalid date for monthly period")
        year, month = (int(part) for part in value.split("-"))
        try:
            start = date(year, month, 1)
            return _bounded_window(granularity, start, _first_of_next_month(start))
        except ValueError as exc:
            raise InvalidRequest("Invalid date for monthly period") from exc

    if granularity == Granularity.YEARLY:
        if not _YEAR_RE.match(value):
            raise InvalidRequest("Invalid date for yearly period")
        try:
            start = date(int(value), 1, 1)
            return _bounded_window(granularity, start, start.replace(year=start.year + 1))
        except ValueError as exc:
            raise InvalidRequest("Invalid date for yearly period") from exc

    raise InvalidRequest("Filtering by date not supported for weekly period")


def resolve_range(start: str | None = None, end: str | None = None) -> DateRange:
    """Validate optional YYYY-MM-DD range bounds."""
    start_date = parse_day(start, "start date") if start is not None else None
    end_date = parse_day(end, "end date") if end is not None else None
    if start_date and end_date and start_date > end_date:
        raise InvalidRequest("Invalid range: start date is after end date")
    return DateRange(start_date, end_date)


def is_valid_period_date(granularity: Granularity, value: str | None) -> bool:
    """True when value is an acceptable single-date filter for granularity."""
    if value is None:
        return False
    try:
        resolve_date_filter(granularity, value)
    except InvalidRequest:
        return False
    return True
