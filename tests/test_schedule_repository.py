"""Tests for the SQL schedule repository and its unit of work."""
from datetime import date, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from fitcoach.models import (
    NotificationType,
    SessionNotification,
    SessionStatus,
    TrainingSession,
    WorkoutPlan,
    WorkoutTemplate,
)

from tests.conftest import MONDAY


class TestUnitOfWork:
    @pytest.mark.asyncio
    async def test_commits_on_exit(self, store, factory):
        async with store.unit_of_work() as repo:
            session = await repo.save_session(
                TrainingSession(client_id=1, scheduled_date=MONDAY, scheduled_time="10:00")
            )

        stored = await factory.reload_session(session.id)
        assert stored.status == SessionStatus.SCHEDULED
        assert stored.type == "personal_training"

    @pytest.mark.asyncio
    async def test_rolls_back_on_error(self, store, factory):
        with pytest.raises(RuntimeError):
            async with store.unit_of_work() as repo:
                session = await repo.save_session(
                    TrainingSession(client_id=1, scheduled_date=MONDAY, scheduled_time="10:00")
                )
                created_id = session.id
                raise RuntimeError("abort")

        assert await factory.reload_session(created_id) is None


class TestPlans:
    @pytest.mark.asyncio
    async def test_save_plan_canonicalizes_weekday_keys(self, store):
        async with store.unit_of_work() as repo:
            plan = await repo.save_plan(
                WorkoutPlan(
                    client_id=1,
                    name="Block",
                    start_date=date(2024, 6, 3),
                    end_date=date(2024, 6, 30),
                    schedule_data={"Monday": 3, "FRIDAY": None},
                )
            )

        async with store.unit_of_work() as repo:
            active = await repo.get_active_plan(1, MONDAY)

        assert active.id == plan.id
        assert active.schedule_data == {"monday": 3, "friday": None}

    @pytest.mark.asyncio
    async def test_no_active_plan_outside_range(self, store, factory):
        await factory.plan({"monday": 1})

        async with store.unit_of_work() as repo:
            assert await repo.get_active_plan(1, date(2024, 7, 1)) is None
            assert await repo.get_active_plan(2, MONDAY) is None

    @pytest.mark.asyncio
    async def test_save_template(self, store):
        async with store.unit_of_work() as repo:
            template = await repo.save_template(WorkoutTemplate(name="Push", exercises=[]))

        async with store.unit_of_work() as repo:
            assert (await repo.get_template(template.id)).name == "Push"


class TestStatusCompareAndSet:
    @pytest.mark.asyncio
    async def test_update_when_status_matches(self, store, factory):
        session = await factory.session()

        async with store.unit_of_work() as repo:
            updated = await repo.update_session_status(
                session.id,
                SessionStatus.SCHEDULED,
                SessionStatus.CONFIRMED,
                {"confirmed_at": datetime(2024, 6, 10, 8, 0)},
            )

        assert updated.status == SessionStatus.CONFIRMED
        assert updated.confirmed_at == datetime(2024, 6, 10, 8, 0)

    @pytest.mark.asyncio
    async def test_no_update_when_status_differs(self, store, factory):
        session = await factory.session(status=SessionStatus.CANCELLED)

        async with store.unit_of_work() as repo:
            updated = await repo.update_session_status(
                session.id, SessionStatus.SCHEDULED, SessionStatus.CONFIRMED
            )

        assert updated is None
        assert (await factory.reload_session(session.id)).status == SessionStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_sessions_for_date_filters_status(self, store, factory):
        kept = await factory.session(scheduled_time="09:00")
        await factory.session(scheduled_time="08:00", status=SessionStatus.CANCELLED)

        async with store.unit_of_work() as repo:
            sessions = await repo.get_sessions_for_date(1, MONDAY, [SessionStatus.SCHEDULED])
            everything = await repo.get_sessions_for_date(1, MONDAY)

        assert [s.id for s in sessions] == [kept.id]
        assert len(everything) == 2


class TestReminderUniqueness:
    @pytest.mark.asyncio
    async def test_second_unsent_reminder_is_rejected(self, store, factory):
        session = await factory.session()

        def reminder():
            return SessionNotification(
                session_id=session.id,
                notification_type=NotificationType.REMINDER,
                title="Upcoming Session",
                scheduled_for=datetime(2024, 6, 10, 9, 45),
                sent=False,
            )

        async with store.unit_of_work() as repo:
            await repo.save_notification(reminder())

        with pytest.raises(IntegrityError):
            async with store.unit_of_work() as repo:
                await repo.save_notification(reminder())

    @pytest.mark.asyncio
    async def test_list_due_skips_reminders_of_closed_sessions(self, store, factory):
        closed = await factory.session(scheduled_time="09:00", status=SessionStatus.CANCELLED)
        open_ = await factory.session(scheduled_time="10:00", status=SessionStatus.CONFIRMED)

        async with store.unit_of_work() as repo:
            for session, minute in ((closed, 0), (open_, 30)):
                await repo.save_notification(
                    SessionNotification(
                        session_id=session.id,
                        notification_type=NotificationType.REMINDER,
                        title="Upcoming Session",
                        scheduled_for=datetime(2024, 6, 10, 8, minute),
                        sent=False,
                    )
                )
            await repo.save_notification(
                SessionNotification(
                    session_id=closed.id,
                    notification_type=NotificationType.CANCELLATION,
                    title="Session Cancelled",
                    scheduled_for=datetime(2024, 6, 10, 8, 45),
                    sent=False,
                )
            )

        async with store.unit_of_work() as repo:
            due = await repo.list_due_notifications(
                datetime(2024, 6, 10, 12, 0),
                [SessionStatus.SCHEDULED, SessionStatus.CONFIRMED],
                limit=1,
            )
            everything = await repo.list_due_notifications(
                datetime(2024, 6, 10, 12, 0),
                [SessionStatus.SCHEDULED, SessionStatus.CONFIRMED],
            )

        assert [(n.session_id, n.notification_type) for n in due] == [
            (open_.id, NotificationType.REMINDER)
        ]
        assert [n.notification_type for n in everything] == [
            NotificationType.REMINDER,
            NotificationType.CANCELLATION,
        ]

    @pytest.mark.asyncio
    async def test_find_unsent_ignores_sent_reminders(self, store, factory):
        session = await factory.session()

        async with store.unit_of_work() as repo:
            saved = await repo.save_notification(
                SessionNotification(
                    session_id=session.id,
                    notification_type=NotificationType.REMINDER,
                    title="Upcoming Session",
                    scheduled_for=datetime(2024, 6, 10, 9, 45),
                    sent=False,
                )
            )
            await repo.mark_notification_sent(saved.id, datetime(2024, 6, 10, 9, 45))

        async with store.unit_of_work() as repo:
            assert await repo.find_unsent_notification(session.id, NotificationType.REMINDER) is None
