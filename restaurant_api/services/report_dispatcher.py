"""Scheduled daily/monthly/yearly report emails."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from restaurant_api.config import settings
from restaurant_api.database import async_session_maker
from restaurant_api.logger import get_logger, log_exception
from restaurant_api.models import Admin, ReportReceiver
from restaurant_api.services import mailer
from restaurant_api.services.errors import DependencyFailure, InvalidRequest
from restaurant_api.services.periods import Granularity
from restaurant_api.services.report_data import REPORT_PERIODS, get_report
from restaurant_api.services.report_document import (
    render_report_pdf,
    report_body,
    report_filename,
    report_subject,
)

logger = get_logger(__name__)

_OPT_IN_COLUMNS = {
    Granularity.DAILY: ReportReceiver.receive_daily,
    Granularity.MONTHLY: ReportReceiver.receive_monthly,
    Granularity.YEARLY: ReportReceiver.receive_yearly,
}

# Firings still sending; held so the loop can move on without the task being collected.
_inflight: set[asyncio.Task[None]] = set()


def _report_period(period: Granularity | str) -> Granularity:
    try:
        granularity = Granularity(period)
    except ValueError as exc:
        raise InvalidRequest(f"Invalid period: {period}") from exc
    if granularity not in REPORT_PERIODS:
        raise InvalidRequest(f"Invalid period: {period}")
    return granularity


@dataclass(frozen=True)
class ReportSchedule:
    """Wall-clock trigger for one report period.

    daily fires every day at hour:minute, monthly on ``day`` of each month,
    yearly on ``month``/``day``.
    """

    period: Granularity
    hour: int
    minute: int = 0
    day: int = 1
    month: int = 1

    def next_run(self, after: datetime) -> datetime:
        """First firing time strictly after ``after``."""
        if self.period == Granularity.DAILY:
            candidate = after.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
            if candidate <= after:
                candidate += timedelta(days=1)
            return candidate

        if self.period == Granularity.MONTHLY:
            candidate = datetime(after.year, after.month, self.day, self.hour, self.minute)
            if candidate <= after:
                year, month = (after.year + 1, 1) if after.month == 12 else (after.year, after.month + 1)
                candidate = datetime(year, month, self.day, self.hour, self.minute)
            return candidate

        candidate = datetime(after.year, self.month, self.day, self.hour, self.minute)
        if candidate <= after:
            candidate = candidate.replace(year=after.year + 1)
        return candidate


def default_schedules() -> list[ReportSchedule]:
    return [
        ReportSchedule(
            Granularity.DAILY,
            hour=settings.daily_report_hour,
            minute=settings.daily_report_minute,
        ),
        ReportSchedule(
            Granularity.MONTHLY,
            hour=settings.monthly_report_hour,
            day=settings.monthly_report_day,
        ),
        ReportSchedule(
            Granularity.YEARLY,
            hour=settings.yearly_report_hour,
            day=settings.yearly_report_day,
            month=settings.yearly_report_month,
        ),
    ]


def resolve_report_date(period: Granularity | str, now: datetime | date) -> str:
    """The completed period a firing at ``now`` reports on.

    daily -> yesterday (YYYY-MM-DD), monthly -> previous month (YYYY-MM),
    yearly -> previous year (YYYY).
    """
    granularity = _report_period(period)
    today = now.date() if isinstance(now, datetime) else now

    if granularity == Granularity.DAILY:
        return (today - timedelta(days=1)).isoformat()
    if granularity == Granularity.MONTHLY:
        last_month = today.replace(day=1) - timedelta(days=1)
        return f"{last_month.year:04d}-{last_month.month:02d}"
    return f"{today.year - 1:04d}"


async def find_recipients(db: AsyncSession, period: Granularity | str) -> list[str]:
    """Emails of admins opted in to ``period`` reports; blank emails are skipped."""
    opt_in = _OPT_IN_COLUMNS[_report_period(period)]
    stmt = (
        select(Admin.email)
        .join(ReportReceiver, ReportReceiver.admin_id == Admin.id)
        .where(opt_in.is_(True))
        .where(Admin.email.is_not(None))
        .where(Admin.email != "")
        .order_by(Admin.id)
    )
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as exc:
        raise DependencyFailure("Report receiver lookup failed") from exc
    return [email for email in result.scalars().all() if email and email.strip()]


async def auto_send(
    sessionmaker: async_sessionmaker[AsyncSession],
    period: Granularity | str,
    report_date: str,
) -> bool:
    """Assemble, render and mail one report to every opted-in admin.

    Returns False without sending when nobody is opted in.
    """
    granularity = _report_period(period)
    async with sessionmaker() as session:
        recipients = await find_recipients(session, granularity)

    if not recipients:
        logger.info("No report receivers opted in", period=granularity.value, date=report_date)
        return False

    report = await get_report(sessionmaker, granularity.value, report_date)
    document = await asyncio.to_thread(render_report_pdf, report)
    await mailer.send_report_email(
        recipients,
        report_subject(granularity.value, report_date, automatic=True),
        report_body(granularity.value, report_date, automatic=True),
        document,
        report_filename(granularity.value, report_date),
    )
    logger.info(
        "Sent automatic report",
        period=granularity.value,
        date=report_date,
        recipients=len(recipients),
    )
    return True


async def run_scheduled_report(
    sessionmaker: async_sessionmaker[AsyncSession],
    period: Granularity | str,
    *,
    now: datetime | None = None,
) -> None:
    """One scheduled firing. Failures are logged and never retried."""
    fired_at = now or datetime.now()
    report_date = resolve_report_date(period, fired_at)
    try:
        await auto_send(sessionmaker, period, report_date)
    except Exception as exc:
        log_exception(
            logger,
            exc,
            "Scheduled report failed",
            period=str(getattr(period, "value", period)),
            date=report_date,
        )


async def _run_schedule(
    schedule: ReportSchedule,
    stop_event: asyncio.Event,
    sessionmaker: async_sessionmaker[AsyncSession],
    clock: Callable[[], datetime],
) -> None:
    last_fire: datetime | None = None
    while not stop_event.is_set():
        now = clock()
        if last_fire is not None and now < last_fire:
            now = last_fire
        fire_at = schedule.next_run(now)
        delay = max((fire_at - clock()).total_seconds(), 0)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=delay)
            break
        except TimeoutError:
            pass

        last_fire = fire_at
        task = asyncio.create_task(run_scheduled_report(sessionmaker, schedule.period, now=fire_at))
        _inflight.add(task)
        task.add_done_callback(_inflight.discard)


async def run_report_scheduler(
    stop_event: asyncio.Event,
    sessionmaker: async_sessionmaker[AsyncSession] | None = None,
    *,
    schedules: Sequence[ReportSchedule] | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> None:
    """Run every report schedule until stop_event is set.

    Schedules are independent: each firing gets its own task, so a slow
    send never delays another schedule or the next firing of its own.
    """
    session_factory = sessionmaker or async_session_maker
    active = list(schedules) if schedules is not None else default_schedules()
    logger.info("Report scheduler started", schedules=[s.period.value for s in active])
    await asyncio.gather(*(_run_schedule(schedule, stop_event, session_factory, clock) for schedule in active))
    logger.info("Report scheduler stopped")
