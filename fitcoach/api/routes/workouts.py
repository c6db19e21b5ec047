"""API routes for resolving a client's workouts by day and week."""
from datetime import date

from fastapi import APIRouter, Depends, Query, Request

from fitcoach.api.routes.dependencies import get_schedule_service, response_meta
from fitcoach.schemas.base import APIResponse
from fitcoach.schemas.workout import ResolvedWorkout
from fitcoach.services.schedule_service import ScheduleService

router = APIRouter(prefix="/clients/{client_id}", tags=["workouts"])


@router.get("/workouts/today", response_model=APIResponse[ResolvedWorkout])
async def get_today_workout(
    client_id: int,
    request: Request,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Today's authoritative workout for the client."""
    workout = await service.resolve_today(client_id)
    return APIResponse(data=workout, meta=response_meta(request))


@router.get("/workouts/{day}", response_model=APIResponse[ResolvedWorkout])
async def get_workout_for_date(
    client_id: int,
    day: date,
    request: Request,
    service: ScheduleService = Depends(get_schedule_service),
):
    workout = await service.resolve_for_date(client_id, day)
    return APIResponse(data=workout, meta=response_meta(request))


@router.get("/calendar", response_model=APIResponse[list[ResolvedWorkout]])
async def get_weekly_calendar(
    client_id: int,
    request: Request,
    week_start: date | None = Query(None, description="First day of the week; defaults to the current week"),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Seven resolved days starting at ``week_start``."""
    week = await service.build_week(client_id, week_start)
    return APIResponse(data=week, meta=response_meta(request))
