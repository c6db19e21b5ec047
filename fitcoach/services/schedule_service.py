"""
Schedule Service

Entry point for callers (HTTP routes, jobs). Every method opens its own unit
of work, so no state is kept between calls and each write either commits as
a whole or not at all.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Callable

from fitcoach.config.settings import Settings, get_settings
from fitcoach.repositories.base import ScheduleRepository, ScheduleStore
from fitcoach.schemas.workout import (
    CompletionData,
    ResolvedWorkout,
    SessionNotificationRead,
    TrainingSessionRead,
)
from fitcoach.services.notification_dispatch import (
    REMINDABLE_STATUSES,
    NotificationDispatchService,
)
from fitcoach.services.reminder_scheduler import ReminderScheduler
from fitcoach.services.session_aggregator import SessionAggregator
from fitcoach.services.session_lifecycle import SessionLifecycle
from fitcoach.services.weekly_calendar import WeeklyCalendarBuilder, week_start_for


class ScheduleService:
    def __init__(
        self,
        store: ScheduleStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._settings = settings or get_settings()
        self._clock = clock

    # ------------------------------------------------------------------
    # Resolution (read paths)
    # ------------------------------------------------------------------

    async def resolve_today(self, client_id: int) -> ResolvedWorkout:
        return await self.resolve_for_date(client_id, self._clock().date())

    async def resolve_for_date(self, client_id: int, day: date) -> ResolvedWorkout:
        async with self._store.unit_of_work() as repo:
            return await SessionAggregator(repo).resolve_for_date(client_id, day)

    async def build_week(self, client_id: int, week_start: date | None = None) -> list[ResolvedWorkout]:
        if week_start is None:
            week_start = week_start_for(self._clock().date(), self._settings.week_starts_on)
        async with self._store.unit_of_work() as repo:
            builder = WeeklyCalendarBuilder(SessionAggregator(repo))
            return await builder.build(client_id, week_start)

    async def list_upcoming_sessions(
        self,
        trainer_id: int,
        start: date | None = None,
        days: int | None = None,
    ) -> list[TrainingSessionRead]:
        start = start or self._clock().date()
        days = days if days is not None else self._settings.upcoming_window_days
        end = start + timedelta(days=days)
        async with self._store.unit_of_work() as repo:
            sessions = await repo.list_upcoming_sessions(
                trainer_id, start, end, REMINDABLE_STATUSES
            )
            return [TrainingSessionRead.model_validate(s) for s in sessions]

    # ------------------------------------------------------------------
    # Lifecycle (write paths)
    # ------------------------------------------------------------------

    async def confirm_session(self, session_id: int) -> TrainingSessionRead:
        async with self._store.unit_of_work() as repo:
            session = await self._lifecycle(repo).confirm(session_id)
            return TrainingSessionRead.model_validate(session)

    async def complete_session(
        self,
        session_id: int,
        completion_data: CompletionData | dict[str, Any] | None = None,
    ) -> TrainingSessionRead:
        async with self._store.unit_of_work() as repo:
            session = await self._lifecycle(repo).complete(session_id, completion_data)
            return TrainingSessionRead.model_validate(session)

    async def cancel_session(self, session_id: int, reason: str | None = None) -> TrainingSessionRead:
        async with self._store.unit_of_work() as repo:
            session = await self._lifecycle(repo).cancel(session_id, reason)
            return TrainingSessionRead.model_validate(session)

    async def mark_no_show(self, session_id: int) -> TrainingSessionRead:
        async with self._store.unit_of_work() as repo:
            session = await self._lifecycle(repo).mark_no_show(session_id)
            return TrainingSessionRead.model_validate(session)

    # ------------------------------------------------------------------
    # Notifier hand-off
    # ------------------------------------------------------------------

    async def due_reminders(
        self, now: datetime | None = None, limit: int = 100
    ) -> list[SessionNotificationRead]:
        async with self._store.unit_of_work() as repo:
            notifications = await NotificationDispatchService(repo, self._clock).due_notifications(
                now, limit
            )
            return [SessionNotificationRead.model_validate(n) for n in notifications]

    async def mark_notification_sent(self, notification_id: int) -> SessionNotificationRead:
        async with self._store.unit_of_work() as repo:
            notification = await NotificationDispatchService(repo, self._clock).mark_sent(
                notification_id
            )
            return SessionNotificationRead.model_validate(notification)

    def _lifecycle(self, repo: ScheduleRepository) -> SessionLifecycle:
        reminders = ReminderScheduler(
            repo,
            lead_minutes=self._settings.reminder_lead_minutes,
            clock=self._clock,
        )
        return SessionLifecycle(repo, reminders, clock=self._clock)
