"""SQLAlchemy-backed implementation of the schedule persistence interfaces."""
from __future__ import annotations
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any, AsyncIterator, Iterable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fitcoach.core.transactions import transaction
from fitcoach.models import (
    NotificationType,
    SessionNotification,
    SessionStatus,
    TrainingSession,
    WorkoutPlan,
    WorkoutTemplate,
)
from fitcoach.repositories.base import ScheduleRepository, ScheduleStore
from fitcoach.repositories.notification_repository import NotificationRepository
from fitcoach.repositories.plan_repository import PlanRepository
from fitcoach.repositories.template_repository import TemplateRepository
from fitcoach.repositories.training_session_repository import TrainingSessionRepository


class SqlScheduleRepository(ScheduleRepository):
    def __init__(self, session: AsyncSession):
        self._session = session
        self.plans = PlanRepository(session)
        self.templates = TemplateRepository(session)
        self.sessions = TrainingSessionRepository(session)
        self.notifications = NotificationRepository(session)

    async def get_active_plan(self, client_id: int, day: date) -> WorkoutPlan | None:
        return await self.plans.get_active_for_client(client_id, day)

    async def get_template(self, template_id: int) -> WorkoutTemplate | None:
        return await self.templates.get(template_id)

    async def save_plan(self, plan: WorkoutPlan) -> WorkoutPlan:
        return await self.plans.create(plan)

    async def save_template(self, template: WorkoutTemplate) -> WorkoutTemplate:
        return await self.templates.create(template)

    async def get_sessions_for_date(
        self,
        client_id: int,
        day: date,
        statuses: Iterable[SessionStatus] | None = None,
    ) -> list[TrainingSession]:
        return await self.sessions.list_for_client_on(client_id, day, statuses)

    async def get_session(self, session_id: int) -> TrainingSession | None:
        return await self.sessions.get(session_id)

    async def save_session(self, session: TrainingSession) -> TrainingSession:
        return await self.sessions.create(session)

    async def update_session_status(
        self,
        session_id: int,
        expected: SessionStatus,
        new_status: SessionStatus,
        values: dict[str, Any] | None = None,
    ) -> TrainingSession | None:
        return await self.sessions.compare_and_set_status(session_id, expected, new_status, values)

    async def save_notification(self, notification: SessionNotification) -> SessionNotification:
        return await self.notifications.create(notification)

    async def find_unsent_notification(
        self, session_id: int, notification_type: NotificationType
    ) -> SessionNotification | None:
        return await self.notifications.find_unsent(session_id, notification_type)

    async def list_due_notifications(
        self,
        now: datetime,
        remindable_statuses: Iterable[SessionStatus],
        limit: int = 100,
    ) -> list[SessionNotification]:
        return await self.notifications.list_due(now, remindable_statuses, limit)

    async def mark_notification_sent(
        self, notification_id: int, sent_at: datetime
    ) -> SessionNotification | None:
        return await self.notifications.mark_sent(notification_id, sent_at)

    async def list_upcoming_sessions(
        self,
        trainer_id: int,
        start: date,
        end: date,
        statuses: Iterable[SessionStatus],
    ) -> list[TrainingSession]:
        return await self.sessions.list_for_trainer_between(trainer_id, start, end, statuses)


class SqlScheduleStore(ScheduleStore):
    """Opens a fresh ``AsyncSession`` and transaction per unit of work."""

    repository_class: type[SqlScheduleRepository] = SqlScheduleRepository

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[SqlScheduleRepository]:
        async with self._session_maker() as session:
            async with transaction(session):
                yield self.repository_class(session)
