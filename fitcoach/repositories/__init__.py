"""Repositories package."""
from fitcoach.repositories.base import Repository, ScheduleRepository, ScheduleStore
from fitcoach.repositories.notification_repository import NotificationRepository
from fitcoach.repositories.plan_repository import PlanRepository
from fitcoach.repositories.schedule_repository import SqlScheduleRepository, SqlScheduleStore
from fitcoach.repositories.template_repository import TemplateRepository
from fitcoach.repositories.training_session_repository import TrainingSessionRepository

__all__ = [
    "Repository",
    "ScheduleRepository",
    "ScheduleStore",
    "NotificationRepository",
    "PlanRepository",
    "SqlScheduleRepository",
    "SqlScheduleStore",
    "TemplateRepository",
    "TrainingSessionRepository",
]
