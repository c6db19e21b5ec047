"""API routes for the training session lifecycle."""
from fastapi import APIRouter, Depends, Query, Request

from fitcoach.api.routes.dependencies import get_schedule_service, response_meta
from fitcoach.core.logging import get_logger
from fitcoach.schemas.base import APIResponse
from fitcoach.schemas.workout import CancelRequest, CompletionData, TrainingSessionRead
from fitcoach.services.schedule_service import ScheduleService

logger = get_logger(__name__)
router = APIRouter(tags=["sessions"])


@router.post("/sessions/{session_id}/confirm", response_model=APIResponse[TrainingSessionRead])
async def confirm_session(
    session_id: int,
    request: Request,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Confirm a session and schedule its reminder. Repeating the call is a no-op."""
    logger.info("confirm_session_requested", session_id=session_id)
    session = await service.confirm_session(session_id)
    return APIResponse(data=session, meta=response_meta(request))


@router.post("/sessions/{session_id}/complete", response_model=APIResponse[TrainingSessionRead])
async def complete_session(
    session_id: int,
    request: Request,
    completion: CompletionData | None = None,
    service: ScheduleService = Depends(get_schedule_service),
):
    session = await service.complete_session(session_id, completion)
    return APIResponse(data=session, meta=response_meta(request))


@router.post("/sessions/{session_id}/cancel", response_model=APIResponse[TrainingSessionRead])
async def cancel_session(
    session_id: int,
    request: Request,
    body: CancelRequest | None = None,
    service: ScheduleService = Depends(get_schedule_service),
):
    session = await service.cancel_session(session_id, body.reason if body else None)
    return APIResponse(data=session, meta=response_meta(request))


@router.post("/sessions/{session_id}/no-show", response_model=APIResponse[TrainingSessionRead])
async def mark_no_show(
    session_id: int,
    request: Request,
    service: ScheduleService = Depends(get_schedule_service),
):
    session = await service.mark_no_show(session_id)
    return APIResponse(data=session, meta=response_meta(request))


@router.get(
    "/trainers/{trainer_id}/sessions/upcoming",
    response_model=APIResponse[list[TrainingSessionRead]],
)
async def list_upcoming_sessions(
    trainer_id: int,
    request: Request,
    days: int | None = Query(None, ge=0, le=60),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Scheduled and confirmed sessions from today through ``days`` ahead."""
    sessions = await service.list_upcoming_sessions(trainer_id, days=days)
    return APIResponse(data=sessions, meta=response_meta(request))
