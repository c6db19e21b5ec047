"""
Reminder Scheduler

Queues the notifications that accompany session lifecycle changes. The
pre-session reminder is time-relative to the session start and deduplicated
per session; the rest are acknowledgements scheduled for "now".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from fitcoach.config.settings import get_settings
from fitcoach.core.exceptions import InvalidScheduleError
from fitcoach.core.logging import get_logger
from fitcoach.models import NotificationType, SessionNotification, TrainingSession
from fitcoach.repositories.base import ScheduleRepository
from fitcoach.schemas.datetime import combine_date_time

logger = get_logger(__name__)


_TITLES: dict[NotificationType, str] = {
    NotificationType.REMINDER: "Upcoming Session",
    NotificationType.CONFIRMATION: "Session Confirmed",
    NotificationType.CANCELLATION: "Session Cancelled",
    NotificationType.COMPLETION: "Session Completed",
    NotificationType.NO_SHOW: "Session Missed",
}


@dataclass(frozen=True)
class ReminderTiming:
    session_id: int
    starts_at: datetime
    remind_at: datetime


def session_start(session: TrainingSession) -> datetime:
    """Combine the session's date and time into one timestamp.

    Raises:
        InvalidScheduleError: date or time missing or not parseable
    """
    details = {"session_id": session.id}
    if session.scheduled_date is None or not session.scheduled_time:
        raise InvalidScheduleError("Session has no scheduled date and time", details)
    try:
        starts_at = combine_date_time(session.scheduled_date, session.scheduled_time)
    except ValueError as e:
        raise InvalidScheduleError(
            str(e),
            {**details, "scheduled_time": session.scheduled_time},
        ) from e
    if starts_at.tzinfo is not None:
        raise InvalidScheduleError(
            "Scheduled time must be local wall-clock time without an offset",
            {**details, "scheduled_time": session.scheduled_time},
        )
    return starts_at


class ReminderScheduler:
    def __init__(
        self,
        repo: ScheduleRepository,
        lead_minutes: int | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._repo = repo
        if lead_minutes is None:
            lead_minutes = get_settings().reminder_lead_minutes
        self._lead = timedelta(minutes=lead_minutes)
        self._clock = clock

    def prepare(self, session: TrainingSession) -> ReminderTiming:
        """Validate the session schedule and compute the reminder time. No I/O."""
        starts_at = session_start(session)
        return ReminderTiming(
            session_id=session.id,
            starts_at=starts_at,
            remind_at=starts_at - self._lead,
        )

    async def on_confirm(self, session: TrainingSession) -> SessionNotification:
        """Schedule the pre-session reminder plus a confirmation notice.

        Returns the existing unsent reminder unchanged if there is one.
        """
        timing = self.prepare(session)

        reminder = await self._repo.find_unsent_notification(session.id, NotificationType.REMINDER)
        if reminder is not None:
            logger.info(
                "reminder_already_scheduled",
                session_id=session.id,
                notification_id=reminder.id,
            )
        else:
            now = self._clock()
            if timing.remind_at < now:
                # Delivery policy for late reminders belongs to the notifier.
                logger.warning(
                    "reminder_in_past",
                    session_id=session.id,
                    remind_at=timing.remind_at.isoformat(),
                )
            reminder = await self._repo.save_notification(
                self._build(
                    session,
                    NotificationType.REMINDER,
                    timing.remind_at,
                    f"Your session starts at {timing.starts_at:%H:%M} on {timing.starts_at:%Y-%m-%d}",
                )
            )
            logger.info(
                "reminder_scheduled",
                session_id=session.id,
                notification_id=reminder.id,
                scheduled_for=timing.remind_at.isoformat(),
            )

        await self.notify(session, NotificationType.CONFIRMATION)
        return reminder

    async def notify(
        self,
        session: TrainingSession,
        notification_type: NotificationType,
        message: str | None = None,
    ) -> SessionNotification:
        """Queue an acknowledgement for ``session`` scheduled for now."""
        notification = self._build(
            session,
            notification_type,
            self._clock(),
            message or f"Session on {session.scheduled_date} is now {session.status.value}",
        )
        return await self._repo.save_notification(notification)

    def _build(
        self,
        session: TrainingSession,
        notification_type: NotificationType,
        scheduled_for: datetime,
        message: str,
    ) -> SessionNotification:
        return SessionNotification(
            session_id=session.id,
            client_id=session.client_id,
            trainer_id=session.trainer_id,
            notification_type=notification_type,
            title=_TITLES[notification_type],
            message=message,
            scheduled_for=scheduled_for,
            sent=False,
        )
