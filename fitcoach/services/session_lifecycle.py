"""
Session Lifecycle

Status state machine for a single training session:

    scheduled -> confirmed -> completed
    scheduled | confirmed -> cancelled
    scheduled | confirmed -> no_show

completed, cancelled and no_show are terminal. Every write is a
compare-and-set on the status column, so a lost race surfaces as a
ConflictError instead of overwriting another writer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from fitcoach.core.exceptions import ConflictError, NotFoundError, ValidationError
from fitcoach.core.logging import get_logger
from fitcoach.models import (
    NotificationType,
    SessionAction,
    SessionStatus,
    TrainingSession,
)
from fitcoach.repositories.base import ScheduleRepository
from fitcoach.schemas.workout import CompletionData
from fitcoach.services.reminder_scheduler import ReminderScheduler

logger = get_logger(__name__)


TERMINAL_STATUSES: frozenset[SessionStatus] = frozenset(
    {SessionStatus.COMPLETED, SessionStatus.CANCELLED, SessionStatus.NO_SHOW}
)

TRANSITIONS: dict[tuple[SessionStatus, SessionAction], SessionStatus] = {
    (SessionStatus.SCHEDULED, SessionAction.CONFIRM): SessionStatus.CONFIRMED,
    (SessionStatus.SCHEDULED, SessionAction.COMPLETE): SessionStatus.COMPLETED,
    (SessionStatus.SCHEDULED, SessionAction.CANCEL): SessionStatus.CANCELLED,
    (SessionStatus.SCHEDULED, SessionAction.NO_SHOW): SessionStatus.NO_SHOW,
    (SessionStatus.CONFIRMED, SessionAction.CONFIRM): SessionStatus.CONFIRMED,
    (SessionStatus.CONFIRMED, SessionAction.COMPLETE): SessionStatus.COMPLETED,
    (SessionStatus.CONFIRMED, SessionAction.CANCEL): SessionStatus.CANCELLED,
    (SessionStatus.CONFIRMED, SessionAction.NO_SHOW): SessionStatus.NO_SHOW,
}


def next_status(current: SessionStatus, action: SessionAction) -> SessionStatus:
    """Status reached by applying ``action`` to ``current``.

    Raises:
        ConflictError: the transition is not allowed
    """
    try:
        return TRANSITIONS[(current, action)]
    except KeyError:
        raise ConflictError(
            f"Cannot {action.value.replace('_', '-')} a session that is {current.value}",
            code="CF_TRANSITION",
            details={"status": current.value, "action": action.value},
        )


class SessionLifecycle:
    def __init__(
        self,
        repo: ScheduleRepository,
        reminders: ReminderScheduler | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._repo = repo
        self._clock = clock
        self._reminders = reminders or ReminderScheduler(repo, clock=clock)

    async def confirm(self, session_id: int) -> TrainingSession:
        """Confirm a scheduled session and schedule its reminder.

        Confirming an already confirmed session returns it unchanged. The
        schedule is validated before the status changes; the status flip and
        the reminder rows share the caller's unit of work.
        """
        session = await self._load(session_id)
        if session.status == SessionStatus.CONFIRMED:
            logger.info("session_confirm_noop", session_id=session.id)
            return session

        next_status(session.status, SessionAction.CONFIRM)
        self._reminders.prepare(session)

        confirmed = await self._transition(
            session,
            SessionAction.CONFIRM,
            {"confirmed_at": self._clock()},
        )
        await self._reminders.on_confirm(confirmed)
        return confirmed

    async def complete(
        self,
        session_id: int,
        completion_data: CompletionData | dict[str, Any] | None = None,
    ) -> TrainingSession:
        completion = _coerce_completion(completion_data)
        session = await self._load(session_id)

        completed = await self._transition(
            session,
            SessionAction.COMPLETE,
            {
                "completed_at": self._clock(),
                "exercises_completed": completion.exercises_completed,
                "trainer_notes": completion.trainer_notes,
                "client_feedback": completion.client_feedback,
                "session_rating": completion.session_rating,
                "completed_duration_minutes": completion.duration_minutes,
                "completion_data": completion.model_dump(mode="json"),
            },
        )
        await self._reminders.notify(completed, NotificationType.COMPLETION)
        return completed

    async def cancel(self, session_id: int, reason: str | None = None) -> TrainingSession:
        """Cancel a session.

        Pending reminders are left in place; the dispatcher drops reminders
        whose session is no longer scheduled or confirmed.
        """
        session = await self._load(session_id)
        cancelled = await self._transition(
            session,
            SessionAction.CANCEL,
            {"cancelled_at": self._clock(), "cancellation_reason": reason},
        )
        await self._reminders.notify(cancelled, NotificationType.CANCELLATION)
        return cancelled

    async def mark_no_show(self, session_id: int) -> TrainingSession:
        session = await self._load(session_id)
        missed = await self._transition(session, SessionAction.NO_SHOW, {})
        await self._reminders.notify(missed, NotificationType.NO_SHOW)
        return missed

    async def _load(self, session_id: int) -> TrainingSession:
        session = await self._repo.get_session(session_id)
        if session is None:
            raise NotFoundError(
                "training_session",
                f"Training session {session_id} not found",
                {"session_id": session_id},
            )
        return session

    async def _transition(
        self,
        session: TrainingSession,
        action: SessionAction,
        values: dict[str, Any],
    ) -> TrainingSession:
        current = session.status
        target = next_status(current, action)
        values = {**values, "updated_at": self._clock()}

        updated = await self._repo.update_session_status(session.id, current, target, values)
        if updated is None:
            raise ConflictError(
                f"Training session {session.id} changed while applying {action.value}",
                code="CF_CONCURRENT_UPDATE",
                details={"session_id": session.id, "expected_status": current.value},
            )

        logger.info(
            "session_status_changed",
            session_id=session.id,
            action=action.value,
            from_status=current.value,
            to_status=target.value,
        )
        return updated


def _coerce_completion(data: CompletionData | dict[str, Any] | None) -> CompletionData:
    if isinstance(data, CompletionData):
        return data
    try:
        return CompletionData.model_validate(data or {})
    except PydanticValidationError as e:
        raise ValidationError(
            "completion_data",
            "Invalid completion data",
            {"fields": [".".join(str(part) for part in err["loc"]) for err in e.errors()]},
        ) from e
