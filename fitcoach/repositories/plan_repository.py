from __future__ import annotations
from datetime import date

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.core.logging import get_logger
from fitcoach.models import WorkoutPlan
from fitcoach.repositories.base import Repository
from fitcoach.services.plan_resolver import normalize_schedule

logger = get_logger(__name__)


class PlanRepository(Repository[WorkoutPlan, int]):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: int) -> WorkoutPlan | None:
        return await self._session.get(WorkoutPlan, id)

    async def create(self, entity: WorkoutPlan) -> WorkoutPlan:
        # Canonicalize weekday keys on write; reads stay case-tolerant for older rows.
        entity.schedule_data = normalize_schedule(entity.schedule_data)
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def get_active_for_client(self, client_id: int, day: date) -> WorkoutPlan | None:
        result = await self._session.execute(
            select(WorkoutPlan)
            .where(
                and_(
                    WorkoutPlan.client_id == client_id,
                    WorkoutPlan.start_date <= day,
                    WorkoutPlan.end_date >= day,
                )
            )
            .order_by(WorkoutPlan.start_date.desc(), WorkoutPlan.id.desc())
        )
        plans = list(result.scalars().all())
        if not plans:
            return None
        if len(plans) > 1:
            logger.warning(
                "overlapping_active_plans",
                client_id=client_id,
                date=day.isoformat(),
                plan_ids=[plan.id for plan in plans],
            )
        return plans[0]
