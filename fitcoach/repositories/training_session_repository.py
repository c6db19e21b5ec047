from __future__ import annotations
from datetime import date, datetime
from typing import Any, Iterable

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.models import SessionStatus, TrainingSession
from fitcoach.repositories.base import Repository


class TrainingSessionRepository(Repository[TrainingSession, int]):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: int) -> TrainingSession | None:
        return await self._session.get(TrainingSession, id)

    async def create(self, entity: TrainingSession) -> TrainingSession:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def list_for_client_on(
        self,
        client_id: int,
        day: date,
        statuses: Iterable[SessionStatus] | None = None,
    ) -> list[TrainingSession]:
        query = select(TrainingSession).where(
            and_(
                TrainingSession.client_id == client_id,
                TrainingSession.scheduled_date == day,
            )
        )
        if statuses is not None:
            query = query.where(TrainingSession.status.in_(list(statuses)))

        query = query.order_by(TrainingSession.scheduled_time, TrainingSession.id)
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def list_for_trainer_between(
        self,
        trainer_id: int,
        start: date,
        end: date,
        statuses: Iterable[SessionStatus],
    ) -> list[TrainingSession]:
        result = await self._session.execute(
            select(TrainingSession)
            .where(
                and_(
                    TrainingSession.trainer_id == trainer_id,
                    TrainingSession.scheduled_date >= start,
                    TrainingSession.scheduled_date <= end,
                    TrainingSession.status.in_(list(statuses)),
                )
            )
            .order_by(
                TrainingSession.scheduled_date,
                TrainingSession.scheduled_time,
                TrainingSession.id,
            )
        )
        return list(result.scalars().all())

    async def compare_and_set_status(
        self,
        id: int,
        expected: SessionStatus,
        new_status: SessionStatus,
        values: dict[str, Any] | None = None,
    ) -> TrainingSession | None:
        """Move ``id`` from ``expected`` to ``new_status`` in a single UPDATE.

        Returns the refreshed session, or ``None`` if another writer changed
        the status first.
        """
        changes = dict(values or {})
        changes["status"] = new_status
        changes.setdefault("updated_at", datetime.utcnow())

        result = await self._session.execute(
            update(TrainingSession)
            .where(
                and_(
                    TrainingSession.id == id,
                    TrainingSession.status == expected,
                )
            )
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None

        return await self._session.get(TrainingSession, id, populate_existing=True)
