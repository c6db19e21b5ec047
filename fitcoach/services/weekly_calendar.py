"""
Weekly Calendar Builder

Resolves seven consecutive days for calendar and weekly views. Each day is
resolved independently, so plans that start or end mid-week are handled by
the per-date range check in the plan resolver.
"""

from __future__ import annotations

from datetime import date, timedelta

from fitcoach.schemas.workout import ResolvedWorkout
from fitcoach.services.session_aggregator import SessionAggregator

DAYS_IN_WEEK = 7


def week_start_for(day: date, first_weekday: int = 0) -> date:
    """First day of the week containing ``day`` (``first_weekday``: 0 = Monday)."""
    if not 0 <= first_weekday <= 6:
        raise ValueError(f"first_weekday must be between 0 and 6, got {first_weekday}")
    return day - timedelta(days=(day.weekday() - first_weekday) % DAYS_IN_WEEK)


def week_dates(week_start: date) -> list[date]:
    return [week_start + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]


class WeeklyCalendarBuilder:
    def __init__(self, aggregator: SessionAggregator):
        self._aggregator = aggregator

    async def build(self, client_id: int, week_start: date) -> list[ResolvedWorkout]:
        """One entry per day; ``result[i].date == week_start + i days``."""
        # Sequential: every resolution shares the caller's database session.
        return [
            await self._aggregator.resolve_for_date(client_id, day)
            for day in week_dates(week_start)
        ]
