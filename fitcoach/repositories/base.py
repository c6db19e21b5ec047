"""Persistence interfaces consumed by the scheduling services."""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import date, datetime
from typing import Any, Generic, Iterable, TypeVar

from fitcoach.models import (
    NotificationType,
    SessionNotification,
    SessionStatus,
    TrainingSession,
    WorkoutPlan,
    WorkoutTemplate,
)

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Minimal CRUD contract shared by the entity repositories."""

    @abstractmethod
    async def get(self, id: ID) -> T | None: ...

    @abstractmethod
    async def create(self, entity: T) -> T: ...


class ScheduleRepository(ABC):
    """Everything the resolver, lifecycle and reminder services read or write.

    An instance is bound to a single unit of work; all writes made through it
    commit or roll back together.
    """

    @abstractmethod
    async def get_active_plan(self, client_id: int, day: date) -> WorkoutPlan | None: ...

    @abstractmethod
    async def get_template(self, template_id: int) -> WorkoutTemplate | None: ...

    @abstractmethod
    async def get_sessions_for_date(
        self,
        client_id: int,
        day: date,
        statuses: Iterable[SessionStatus] | None = None,
    ) -> list[TrainingSession]: ...

    @abstractmethod
    async def get_session(self, session_id: int) -> TrainingSession | None: ...

    @abstractmethod
    async def save_session(self, session: TrainingSession) -> TrainingSession: ...

    @abstractmethod
    async def update_session_status(
        self,
        session_id: int,
        expected: SessionStatus,
        new_status: SessionStatus,
        values: dict[str, Any] | None = None,
    ) -> TrainingSession | None:
        """Compare-and-set the status; ``None`` when ``expected`` no longer holds."""

    @abstractmethod
    async def save_notification(self, notification: SessionNotification) -> SessionNotification: ...

    @abstractmethod
    async def find_unsent_notification(
        self, session_id: int, notification_type: NotificationType
    ) -> SessionNotification | None: ...

    @abstractmethod
    async def list_due_notifications(
        self,
        now: datetime,
        remindable_statuses: Iterable[SessionStatus],
        limit: int = 100,
    ) -> list[SessionNotification]:
        """Due, unsent notifications; reminders only while their session is remindable."""

    @abstractmethod
    async def mark_notification_sent(
        self, notification_id: int, sent_at: datetime
    ) -> SessionNotification | None: ...

    @abstractmethod
    async def list_upcoming_sessions(
        self,
        trainer_id: int,
        start: date,
        end: date,
        statuses: Iterable[SessionStatus],
    ) -> list[TrainingSession]: ...


class ScheduleStore(ABC):
    """Factory for transaction-scoped schedule repositories."""

    @abstractmethod
    def unit_of_work(self) -> AbstractAsyncContextManager[ScheduleRepository]:
        """Open one transaction; commit on normal exit, roll back on error."""
