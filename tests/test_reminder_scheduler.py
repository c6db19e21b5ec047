"""Unit tests for reminder timing and deduplication."""
from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from fitcoach.core.exceptions import InvalidScheduleError
from fitcoach.models import (
    NotificationType,
    SessionNotification,
    SessionStatus,
    TrainingSession,
)
from fitcoach.repositories.base import ScheduleRepository
from fitcoach.services.reminder_scheduler import ReminderScheduler, session_start

from tests.conftest import FIXED_NOW, MONDAY, fixed_clock


def make_session(scheduled_time="10:00", scheduled_date=MONDAY, status=SessionStatus.CONFIRMED):
    return TrainingSession(
        id=5,
        client_id=1,
        trainer_id=7,
        scheduled_date=scheduled_date,
        scheduled_time=scheduled_time,
        status=status,
    )


@pytest.fixture
def repo():
    repo = AsyncMock(spec=ScheduleRepository)
    repo.find_unsent_notification.return_value = None
    repo.save_notification.side_effect = lambda notification: notification
    return repo


class TestReminderTiming:
    @pytest.mark.parametrize(
        "scheduled_time,expected",
        [
            ("10:00", datetime(2024, 6, 10, 9, 45)),
            ("07:30:00", datetime(2024, 6, 10, 7, 15)),
            ("6:05 PM", datetime(2024, 6, 10, 17, 50)),
            ("00:10", datetime(2024, 6, 9, 23, 55)),
        ],
    )
    def test_remind_fifteen_minutes_before_start(self, repo, scheduled_time, expected):
        scheduler = ReminderScheduler(repo, lead_minutes=15, clock=fixed_clock)

        timing = scheduler.prepare(make_session(scheduled_time))

        assert timing.remind_at == expected
        assert timing.starts_at - timing.remind_at == timedelta(minutes=15)

    def test_lead_time_comes_from_settings(self, repo):
        scheduler = ReminderScheduler(repo, clock=fixed_clock)

        timing = scheduler.prepare(make_session("10:00"))

        assert timing.remind_at == datetime(2024, 6, 10, 9, 45)

    def test_prepare_does_no_io(self, repo):
        ReminderScheduler(repo, lead_minutes=15).prepare(make_session())

        repo.find_unsent_notification.assert_not_called()
        repo.save_notification.assert_not_called()


class TestSessionStart:
    def test_combines_date_and_time(self):
        assert session_start(make_session("14:30")) == datetime(2024, 6, 10, 14, 30)

    @pytest.mark.parametrize("scheduled_time", [None, "", "   ", "half past", "24:61"])
    def test_unusable_time(self, scheduled_time):
        with pytest.raises(InvalidScheduleError) as exc_info:
            session_start(make_session(scheduled_time))

        assert exc_info.value.code == "VAL_SCHEDULE_001"
        assert exc_info.value.details["session_id"] == 5

    def test_missing_date(self):
        with pytest.raises(InvalidScheduleError):
            session_start(make_session("10:00", scheduled_date=None))

    def test_offset_times_are_rejected(self):
        with pytest.raises(InvalidScheduleError):
            session_start(make_session("10:00+02:00"))


class TestOnConfirm:
    @pytest.mark.asyncio
    async def test_creates_reminder_and_confirmation(self, repo):
        scheduler = ReminderScheduler(repo, lead_minutes=15, clock=fixed_clock)

        reminder = await scheduler.on_confirm(make_session("10:00"))

        assert reminder.notification_type == NotificationType.REMINDER
        assert reminder.scheduled_for == datetime(2024, 6, 10, 9, 45)
        assert reminder.sent is False
        assert reminder.session_id == 5
        saved = [call.args[0] for call in repo.save_notification.await_args_list]
        assert [n.notification_type for n in saved] == [
            NotificationType.REMINDER,
            NotificationType.CONFIRMATION,
        ]
        assert saved[1].scheduled_for == FIXED_NOW

    @pytest.mark.asyncio
    async def test_existing_unsent_reminder_is_reused(self, repo):
        existing = SessionNotification(
            id=40,
            session_id=5,
            notification_type=NotificationType.REMINDER,
            scheduled_for=datetime(2024, 6, 10, 9, 45),
            sent=False,
        )
        repo.find_unsent_notification.return_value = existing
        scheduler = ReminderScheduler(repo, lead_minutes=15, clock=fixed_clock)

        reminder = await scheduler.on_confirm(make_session("10:00"))

        assert reminder is existing
        repo.find_unsent_notification.assert_awaited_once_with(5, NotificationType.REMINDER)
        repo.save_notification.assert_awaited_once()
        saved = repo.save_notification.await_args.args[0]
        assert saved.notification_type == NotificationType.CONFIRMATION

    @pytest.mark.asyncio
    async def test_reminder_in_the_past_is_still_queued(self, repo):
        late_clock = lambda: datetime(2024, 6, 10, 9, 55)  # noqa: E731
        scheduler = ReminderScheduler(repo, lead_minutes=15, clock=late_clock)

        reminder = await scheduler.on_confirm(make_session("10:00"))

        assert reminder.scheduled_for == datetime(2024, 6, 10, 9, 45)
        assert repo.save_notification.await_count == 2

    @pytest.mark.asyncio
    async def test_invalid_schedule_writes_nothing(self, repo):
        scheduler = ReminderScheduler(repo, lead_minutes=15, clock=fixed_clock)

        with pytest.raises(InvalidScheduleError):
            await scheduler.on_confirm(make_session(None))

        repo.save_notification.assert_not_called()


class TestNotify:
    @pytest.mark.asyncio
    async def test_acknowledgement_is_due_now(self, repo):
        scheduler = ReminderScheduler(repo, lead_minutes=15, clock=fixed_clock)
        session = make_session(status=SessionStatus.CANCELLED)

        notification = await scheduler.notify(session, NotificationType.CANCELLATION)

        assert notification.scheduled_for == FIXED_NOW
        assert notification.title == "Session Cancelled"
        assert notification.client_id == 1
        assert notification.trainer_id == 7
        assert "cancelled" in notification.message
        assert session.scheduled_date == date(2024, 6, 10)
