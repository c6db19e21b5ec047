"""
Notification Dispatch

Hand-off point for the external notifier: lists notifications that are due
and records delivery. Reminder validity is derived from the session's current
status at read time, so cancelling a session never has to touch its reminders.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from fitcoach.core.exceptions import NotFoundError, ValidationError
from fitcoach.core.logging import get_logger
from fitcoach.models import SessionNotification, SessionStatus
from fitcoach.repositories.base import ScheduleRepository

logger = get_logger(__name__)

REMINDABLE_STATUSES: frozenset[SessionStatus] = frozenset(
    {SessionStatus.SCHEDULED, SessionStatus.CONFIRMED}
)


class NotificationDispatchService:
    def __init__(
        self,
        repo: ScheduleRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._repo = repo
        self._clock = clock

    async def due_notifications(
        self, now: datetime | None = None, limit: int = 100
    ) -> list[SessionNotification]:
        now = now or self._clock()
        # scheduled_for is stored as naive local wall-clock time.
        if now.tzinfo is not None:
            raise ValidationError(
                "now",
                "Timestamp must be local time without a UTC offset",
                {"now": now.isoformat()},
            )

        due = await self._repo.list_due_notifications(now, REMINDABLE_STATUSES, limit)
        logger.debug("notifications_due", count=len(due), limit=limit)
        return due

    async def mark_sent(self, notification_id: int) -> SessionNotification:
        notification = await self._repo.mark_notification_sent(notification_id, self._clock())
        if notification is None:
            raise NotFoundError(
                "session_notification",
                f"Notification {notification_id} not found",
                {"notification_id": notification_id},
            )
        return notification
