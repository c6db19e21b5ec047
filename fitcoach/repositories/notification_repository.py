from __future__ import annotations
from datetime import datetime
from typing import Iterable

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.models import NotificationType, SessionNotification, SessionStatus, TrainingSession
from fitcoach.repositories.base import Repository


class NotificationRepository(Repository[SessionNotification, int]):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: int) -> SessionNotification | None:
        return await self._session.get(SessionNotification, id)

    async def create(self, entity: SessionNotification) -> SessionNotification:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def find_unsent(
        self, session_id: int, notification_type: NotificationType
    ) -> SessionNotification | None:
        result = await self._session.execute(
            select(SessionNotification)
            .where(
                and_(
                    SessionNotification.session_id == session_id,
                    SessionNotification.notification_type == notification_type,
                    SessionNotification.sent.is_(False),
                )
            )
            .order_by(SessionNotification.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_due(
        self,
        now: datetime,
        remindable_statuses: Iterable[SessionStatus],
        limit: int = 100,
    ) -> list[SessionNotification]:
        """Unsent notifications due by ``now``, oldest first.

        Reminders whose session has left ``remindable_statuses`` are excluded
        before ``limit`` applies, so they never crowd out deliverable rows.
        """
        result = await self._session.execute(
            select(SessionNotification)
            .join(TrainingSession, TrainingSession.id == SessionNotification.session_id)
            .where(
                and_(
                    SessionNotification.sent.is_(False),
                    SessionNotification.scheduled_for <= now,
                    or_(
                        SessionNotification.notification_type != NotificationType.REMINDER,
                        TrainingSession.status.in_(list(remindable_statuses)),
                    ),
                )
            )
            .order_by(SessionNotification.scheduled_for, SessionNotification.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def mark_sent(self, id: int, sent_at: datetime) -> SessionNotification | None:
        notification = await self.get(id)
        if notification and not notification.sent:
            notification.sent = True
            notification.sent_at = sent_at
            await self._session.flush()
        return notification
