"""
Shared fixtures for the scheduling tests.

Each test gets its own SQLite database file (aiosqlite) and a fixed clock:
Monday 2024-06-10 08:00.
"""
from datetime import date, datetime

import pytest
import pytest_asyncio
from sqlalchemy import select

from fitcoach.db.database import create_engine, create_session_maker, init_db
from fitcoach.models import (
    SessionNotification,
    SessionStatus,
    TrainingSession,
    WorkoutPlan,
    WorkoutTemplate,
)
from fitcoach.repositories.schedule_repository import SqlScheduleStore
from fitcoach.services.schedule_service import ScheduleService

FIXED_NOW = datetime(2024, 6, 10, 8, 0, 0)
MONDAY = date(2024, 6, 10)


def fixed_clock() -> datetime:
    return FIXED_NOW


class ScheduleFactory:
    """Inserts rows directly, bypassing the services under test."""

    def __init__(self, session_maker):
        self._session_maker = session_maker

    async def _add(self, entity):
        async with self._session_maker() as db:
            db.add(entity)
            await db.commit()
        return entity

    async def template(self, name: str = "Upper Body", is_rest_day: bool = False, **kwargs) -> WorkoutTemplate:
        kwargs.setdefault("estimated_duration_minutes", 0 if is_rest_day else 45)
        kwargs.setdefault(
            "exercises",
            [] if is_rest_day else [
                {"exercise_id": 1, "name": "Bench Press", "order": 1, "sets": [{"reps": 8, "weight": 60}]},
                {"exercise_id": 2, "name": "Pull Up", "order": 2, "sets": [{"reps": 6}]},
            ],
        )
        return await self._add(WorkoutTemplate(name=name, is_rest_day=is_rest_day, **kwargs))

    async def plan(
        self,
        schedule: dict,
        client_id: int = 1,
        start: date = date(2024, 6, 3),
        end: date = date(2024, 6, 30),
        **kwargs,
    ) -> WorkoutPlan:
        return await self._add(
            WorkoutPlan(
                client_id=client_id,
                name=kwargs.pop("name", "Summer Block"),
                start_date=start,
                end_date=end,
                schedule_data=schedule,
                **kwargs,
            )
        )

    async def session(
        self,
        client_id: int = 1,
        scheduled_date: date = MONDAY,
        scheduled_time: str | None = "10:00",
        status: SessionStatus = SessionStatus.SCHEDULED,
        template_id: int | None = None,
        trainer_id: int = 7,
        **kwargs,
    ) -> TrainingSession:
        return await self._add(
            TrainingSession(
                client_id=client_id,
                trainer_id=trainer_id,
                scheduled_date=scheduled_date,
                scheduled_time=scheduled_time,
                status=status,
                template_id=template_id,
                type=kwargs.pop("type", "personal_training"),
                **kwargs,
            )
        )

    async def reload_session(self, session_id: int) -> TrainingSession:
        async with self._session_maker() as db:
            return await db.get(TrainingSession, session_id)

    async def notifications(self, session_id: int) -> list[SessionNotification]:
        async with self._session_maker() as db:
            result = await db.execute(
                select(SessionNotification)
                .where(SessionNotification.session_id == session_id)
                .order_by(SessionNotification.id)
            )
            return list(result.scalars().all())


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'schedule.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return create_session_maker(engine)


@pytest.fixture
def store(session_maker):
    return SqlScheduleStore(session_maker)


@pytest.fixture
def service(store):
    return ScheduleService(store, clock=fixed_clock)


@pytest.fixture
def factory(session_maker):
    return ScheduleFactory(session_maker)
