"""ORM models for plans, templates, sessions and notifications."""
from fitcoach.models.enums import (
    NotificationType,
    ResolvedSource,
    SessionAction,
    SessionStatus,
)
from fitcoach.models.session_notification import SessionNotification
from fitcoach.models.training_session import TrainingSession
from fitcoach.models.workout_plan import WorkoutPlan
from fitcoach.models.workout_template import WorkoutTemplate

__all__ = [
    "NotificationType",
    "ResolvedSource",
    "SessionAction",
    "SessionStatus",
    "SessionNotification",
    "TrainingSession",
    "WorkoutPlan",
    "WorkoutTemplate",
]
