"""Tests for scheduled report emails."""

import asyncio
from datetime import date, datetime
from unittest.mock import AsyncMock

import pytest

from restaurant_api.services import mailer, report_dispatcher
from restaurant_api.services.errors import DependencyFailure, InvalidRequest
from restaurant_api.services.periods import Granularity
from restaurant_api.services.report_dispatcher import (
    ReportSchedule,
    auto_send,
    default_schedules,
    find_recipients,
    resolve_report_date,
    run_report_scheduler,
    run_scheduled_report,
)
from tests.factories import AdminFactory, ReportReceiverFactory


@pytest.fixture
def send_mock(monkeypatch):
    mock = AsyncMock()
    monkeypatch.setattr(mailer, "send_report_email", mock)
    return mock


@pytest.fixture
async def receivers(db):
    """Two daily receivers, one monthly-only, one opted out, one daily without email."""
    alice = await AdminFactory.create_async(db, username="alice", email="alice@example.com")
    bob = await AdminFactory.create_async(db, username="bob", email="bob@example.com")
    carol = await AdminFactory.create_async(db, username="carol", email="carol@example.com")
    dave = await AdminFactory.create_async(db, username="dave", email="dave@example.com")
    erin = await AdminFactory.create_async(db, username="erin", email=None)

    await ReportReceiverFactory.create_async(db, admin_id=alice.id, receive_daily=True, receive_yearly=True)
    await ReportReceiverFactory.create_async(db, admin_id=bob.id, receive_daily=True)
    await ReportReceiverFactory.create_async(db, admin_id=carol.id, receive_monthly=True)
    await ReportReceiverFactory.create_async(db, admin_id=dave.id)
    await ReportReceiverFactory.create_async(db, admin_id=erin.id, receive_daily=True)
    await db.commit()


class TestReportSchedule:
    def test_daily_fires_later_today_or_tomorrow(self):
        schedule = ReportSchedule(Granularity.DAILY, hour=0, minute=5)
        assert schedule.next_run(datetime(2024, 3, 1, 0, 1)) == datetime(2024, 3, 1, 0, 5)
        assert schedule.next_run(datetime(2024, 3, 1, 0, 5)) == datetime(2024, 3, 2, 0, 5)

    def test_monthly_rolls_over_year(self):
        schedule = ReportSchedule(Granularity.MONTHLY, hour=10)
        assert schedule.next_run(datetime(2024, 12, 1, 10, 0)) == datetime(2025, 1, 1, 10, 0)
        assert schedule.next_run(datetime(2024, 11, 30, 23, 0)) == datetime(2024, 12, 1, 10, 0)

    def test_yearly(self):
        schedule = ReportSchedule(Granularity.YEARLY, hour=10, day=1, month=1)
        assert schedule.next_run(datetime(2024, 1, 1, 9, 59)) == datetime(2024, 1, 1, 10, 0)
        assert schedule.next_run(datetime(2024, 1, 1, 10, 0, 1)) == datetime(2025, 1, 1, 10, 0)

    def test_default_schedules_cover_three_periods(self):
        periods = [schedule.period for schedule in default_schedules()]
        assert periods == [Granularity.DAILY, Granularity.MONTHLY, Granularity.YEARLY]


class TestResolveReportDate:
    def test_daily_reports_yesterday(self):
        assert resolve_report_date("daily", datetime(2024, 3, 1, 0, 5)) == "2024-02-29"

    def test_monthly_reports_previous_month(self):
        assert resolve_report_date("monthly", date(2024, 1, 1)) == "2023-12"

    def test_yearly_reports_previous_year(self):
        assert resolve_report_date(Granularity.YEARLY, datetime(2024, 1, 1, 10)) == "2023"

    def test_weekly_not_schedulable(self):
        with pytest.raises(InvalidRequest):
            resolve_report_date("weekly", date(2024, 1, 1))


class TestFindRecipients:
    async def test_daily(self, db, receivers):
        assert await find_recipients(db, "daily") == ["alice@example.com", "bob@example.com"]

    async def test_monthly(self, db, receivers):
        assert await find_recipients(db, Granularity.MONTHLY) == ["carol@example.com"]

    async def test_blank_email_skipped(self, db):
        admin = await AdminFactory.create_async(db, email="")
        await ReportReceiverFactory.create_async(db, admin_id=admin.id, receive_yearly=True)
        await db.commit()
        assert await find_recipients(db, "yearly") == []


class TestAutoSend:
    async def test_no_receivers_sends_nothing(self, session_maker, send_mock):
        assert await auto_send(session_maker, "daily", "2024-02-29") is False
        send_mock.assert_not_awaited()

    async def test_one_message_to_all_receivers(self, session_maker, receivers, send_mock):
        assert await auto_send(session_maker, "daily", "2024-02-29") is True

        send_mock.assert_awaited_once()
        recipients, subject, body, attachment, filename = send_mock.await_args.args
        assert recipients == ["alice@example.com", "bob@example.com"]
        assert subject == "Automatic Daily Report - 2024-02-29"
        assert body == "Please find attached the automatic daily report for 2024-02-29."
        assert attachment.startswith(b"%PDF")
        assert filename == "report-daily-2024-02-29.pdf"

    async def test_scheduled_failure_is_logged_not_raised(self, session_maker, receivers, send_mock):
        send_mock.side_effect = DependencyFailure("Email delivery failed")

        await run_scheduled_report(session_maker, "yearly", now=datetime(2024, 1, 1, 10))

        send_mock.assert_awaited_once()
        assert send_mock.await_args.args[1] == "Automatic Yearly Report - 2023"


class TestScheduler:
    async def test_fires_then_stops(self, session_maker, monkeypatch):
        fired = []
        done = asyncio.Event()

        async def record(sessionmaker, period, *, now=None):
            fired.append((period, now))
            done.set()

        monkeypatch.setattr(report_dispatcher, "run_scheduled_report", record)
        stop_event = asyncio.Event()
        # Clock sits just before midnight, so the 00:00 daily firing is due immediately
        clock = lambda: datetime(2024, 3, 1, 23, 59, 59, 999999)  # noqa: E731

        task = asyncio.create_task(
            run_report_scheduler(
                stop_event,
                session_maker,
                schedules=[ReportSchedule(Granularity.DAILY, hour=0, minute=0)],
                clock=clock,
            )
        )
        await asyncio.wait_for(done.wait(), timeout=5)
        stop_event.set()
        await asyncio.wait_for(task, timeout=5)

        assert fired == [(Granularity.DAILY, datetime(2024, 3, 2, 0, 0))]

    async def test_stop_before_first_firing(self, session_maker, monkeypatch):
        record = AsyncMock()
        monkeypatch.setattr(report_dispatcher, "run_scheduled_report", record)
        stop_event = asyncio.Event()
        stop_event.set()

        await asyncio.wait_for(run_report_scheduler(stop_event, session_maker), timeout=5)

        record.assert_not_called()
