"""API routes used by the external notifier to fetch and acknowledge notifications."""
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request

from fitcoach.api.routes.dependencies import get_schedule_service, response_meta
from fitcoach.schemas.base import APIResponse
from fitcoach.schemas.workout import SessionNotificationRead
from fitcoach.services.schedule_service import ScheduleService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/due", response_model=APIResponse[list[SessionNotificationRead]])
async def list_due_notifications(
    request: Request,
    now: datetime | None = Query(None),
    limit: int = Query(100, ge=1, le=500),
    service: ScheduleService = Depends(get_schedule_service),
):
    notifications = await service.due_reminders(now, limit)
    return APIResponse(data=notifications, meta=response_meta(request))


@router.post("/{notification_id}/sent", response_model=APIResponse[SessionNotificationRead])
async def mark_notification_sent(
    notification_id: int,
    request: Request,
    service: ScheduleService = Depends(get_schedule_service),
):
    notification = await service.mark_notification_sent(notification_id)
    return APIResponse(data=notification, meta=response_meta(request))
