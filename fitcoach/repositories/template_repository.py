from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.models import WorkoutTemplate
from fitcoach.repositories.base import Repository


class TemplateRepository(Repository[WorkoutTemplate, int]):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: int) -> WorkoutTemplate | None:
        return await self._session.get(WorkoutTemplate, id)

    async def create(self, entity: WorkoutTemplate) -> WorkoutTemplate:
        self._session.add(entity)
        await self._session.flush()
        return entity
