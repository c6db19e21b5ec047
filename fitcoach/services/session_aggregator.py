"""
Session Aggregator

Decides the one authoritative workout for a client on a date. An ad-hoc
trainer session always takes precedence over the recurring plan; templates
flagged as rest days are classified as such and carry no start action.
"""

from __future__ import annotations

from datetime import date, time

from fitcoach.core.exceptions import NotFoundError
from fitcoach.models import (
    ResolvedSource,
    SessionStatus,
    TrainingSession,
    WorkoutTemplate,
)
from fitcoach.repositories.base import ScheduleRepository
from fitcoach.schemas.datetime import parse_time
from fitcoach.schemas.workout import (
    ResolvedWorkout,
    TrainingSessionRead,
    WorkoutTemplateRead,
)
from fitcoach.services import plan_resolver


# Cancelled and no-show sessions never displace the plan.
ACTIVE_SESSION_STATUSES: tuple[SessionStatus, ...] = (
    SessionStatus.SCHEDULED,
    SessionStatus.CONFIRMED,
    SessionStatus.COMPLETED,
)


def session_sort_key(session: TrainingSession) -> tuple[int, time, int]:
    """Earliest start first; sessions without a usable time go last."""
    try:
        at = parse_time(session.scheduled_time) if session.scheduled_time else None
    except ValueError:
        at = None
    if at is None:
        return (1, time.max, session.id or 0)
    return (0, at.replace(tzinfo=None), session.id or 0)


class SessionAggregator:
    def __init__(self, repo: ScheduleRepository):
        self._repo = repo

    async def resolve_for_date(self, client_id: int, day: date) -> ResolvedWorkout:
        sessions = await self._repo.get_sessions_for_date(
            client_id, day, statuses=ACTIVE_SESSION_STATUSES
        )
        sessions = [s for s in sessions if s.status in ACTIVE_SESSION_STATUSES]

        if sessions:
            session = min(sessions, key=session_sort_key)
            template = None
            if session.template_id is not None:
                template = await self._require_template(session.template_id)
            source = (
                ResolvedSource.RESTDAY
                if template is not None and template.is_rest_day
                else ResolvedSource.ADHOC
            )
            return ResolvedWorkout(
                date=day,
                source=source,
                template=_template_read(template),
                session=TrainingSessionRead.model_validate(session),
                plan_id=session.plan_id,
            )

        plan = await self._repo.get_active_plan(client_id, day)
        template_id = plan_resolver.resolve(plan, day)
        if template_id is None:
            return ResolvedWorkout.nothing(day)

        template = await self._require_template(template_id)
        source = ResolvedSource.PLAN_RESTDAY if template.is_rest_day else ResolvedSource.PLAN
        return ResolvedWorkout(
            date=day,
            source=source,
            template=_template_read(template),
            plan_id=plan.id,
        )

    async def _require_template(self, template_id: int) -> WorkoutTemplate:
        template = await self._repo.get_template(template_id)
        if template is None:
            raise NotFoundError(
                "workout_template",
                f"Workout template {template_id} not found",
                {"template_id": template_id},
            )
        return template


def _template_read(template: WorkoutTemplate | None) -> WorkoutTemplateRead | None:
    if template is None:
        return None
    return WorkoutTemplateRead.model_validate(template)
