"""
Plan Schedule Resolver

Maps a calendar date to the workout template a recurring weekly plan assigns
to it. Pure functions only: callers fetch the plan.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from fitcoach.core.logging import get_logger
from fitcoach.models import WorkoutPlan

logger = get_logger(__name__)

WEEKDAY_NAMES: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def weekday_name(day: date) -> str:
    """Lower-case English weekday name of ``day``."""
    return WEEKDAY_NAMES[day.weekday()]


def normalize_schedule(schedule_data: Mapping[Any, Any] | None) -> dict[str, Any]:
    """Return ``schedule_data`` with trimmed, lower-cased weekday keys."""
    if not schedule_data:
        return {}
    return {str(key).strip().lower(): value for key, value in schedule_data.items()}


def _coerce_template_id(value: Any) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    logger.warning("unusable_template_reference", value=repr(value))
    return None


def resolve(plan: WorkoutPlan | None, day: date) -> int | None:
    """Template id the plan assigns to ``day``, or ``None``.

    Fails closed outside ``[plan.start_date, plan.end_date]``. Weekday keys
    are matched case-insensitively since older plans were saved with mixed
    casing.
    """
    if plan is None:
        return None
    if not plan.is_active_on(day):
        return None

    schedule = normalize_schedule(plan.schedule_data)
    return _coerce_template_id(schedule.get(weekday_name(day)))
