"""Shared dependencies for API routes."""
from fastapi import Depends, Request

from fitcoach.db.database import async_session_maker
from fitcoach.repositories.base import ScheduleStore
from fitcoach.repositories.schedule_repository import SqlScheduleStore
from fitcoach.schemas.base import ResponseMeta
from fitcoach.services.schedule_service import ScheduleService


def get_schedule_store() -> ScheduleStore:
    return SqlScheduleStore(async_session_maker)


def get_schedule_service(store: ScheduleStore = Depends(get_schedule_store)) -> ScheduleService:
    return ScheduleService(store)


def response_meta(request: Request) -> ResponseMeta:
    return ResponseMeta(request_id=getattr(request.state, "request_id", None))
