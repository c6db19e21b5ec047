"""Tests for seven-day calendar resolution."""
from datetime import date, timedelta

import pytest

from fitcoach.models import ResolvedSource
from fitcoach.services.weekly_calendar import week_dates, week_start_for

from tests.conftest import MONDAY


class TestWeekStart:
    @pytest.mark.parametrize(
        "day,first_weekday,expected",
        [
            (date(2024, 6, 10), 0, date(2024, 6, 10)),
            (date(2024, 6, 13), 0, date(2024, 6, 10)),
            (date(2024, 6, 16), 0, date(2024, 6, 10)),
            (date(2024, 6, 16), 6, date(2024, 6, 16)),
            (date(2024, 6, 15), 6, date(2024, 6, 9)),
        ],
    )
    def test_week_start_for(self, day, first_weekday, expected):
        assert week_start_for(day, first_weekday) == expected

    def test_invalid_first_weekday(self):
        with pytest.raises(ValueError):
            week_start_for(MONDAY, 7)

    def test_week_dates_are_consecutive(self):
        assert week_dates(date(2024, 6, 28)) == [
            date(2024, 6, 28) + timedelta(days=i) for i in range(7)
        ]


class TestBuildWeek:
    @pytest.mark.asyncio
    async def test_one_entry_per_day_in_order(self, service):
        week = await service.build_week(1, date(2024, 6, 12))

        assert len(week) == 7
        for offset, entry in enumerate(week):
            assert entry.date == date(2024, 6, 12) + timedelta(days=offset)

    @pytest.mark.asyncio
    async def test_plan_starting_mid_week(self, service, factory):
        template = await factory.template()
        rest = await factory.template("Recovery", is_rest_day=True)
        await factory.plan(
            {
                "monday": template.id,
                "tuesday": template.id,
                "wednesday": template.id,
                "thursday": rest.id,
                "friday": template.id,
                "saturday": None,
                "sunday": rest.id,
            },
            start=date(2024, 6, 12),
        )

        week = await service.build_week(1, MONDAY)

        assert [entry.source for entry in week] == [
            ResolvedSource.NONE,
            ResolvedSource.NONE,
            ResolvedSource.PLAN,
            ResolvedSource.PLAN_RESTDAY,
            ResolvedSource.PLAN,
            ResolvedSource.NONE,
            ResolvedSource.PLAN_RESTDAY,
        ]

    @pytest.mark.asyncio
    async def test_consecutive_plans_within_one_week(self, service, factory):
        first = await factory.template("Block A")
        second = await factory.template("Block B")
        every_day = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
        await factory.plan({d: first.id for d in every_day}, end=date(2024, 6, 12))
        await factory.plan({d: second.id for d in every_day}, start=date(2024, 6, 13))

        week = await service.build_week(1, MONDAY)

        assert [entry.template.name for entry in week] == ["Block A"] * 3 + ["Block B"] * 4

    @pytest.mark.asyncio
    async def test_adhoc_session_overrides_one_day(self, service, factory):
        planned = await factory.template("Leg Day")
        adhoc = await factory.template("Mobility")
        await factory.plan({"monday": planned.id, "wednesday": planned.id})
        await factory.session(scheduled_date=date(2024, 6, 12), template_id=adhoc.id)

        week = await service.build_week(1, MONDAY)

        assert week[0].source == ResolvedSource.PLAN
        assert week[2].source == ResolvedSource.ADHOC
        assert week[2].template.name == "Mobility"

    @pytest.mark.asyncio
    async def test_defaults_to_current_week(self, service):
        week = await service.build_week(1)

        assert week[0].date == MONDAY
        assert week[-1].date == date(2024, 6, 16)
