"""Read models and request bodies for workout resolution and session lifecycle."""
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from fitcoach.models.enums import (
    NotificationType,
    ResolvedSource,
    SessionStatus,
)


class ExerciseSet(BaseModel):
    reps: int | None = None
    weight: float | None = None
    duration: int | None = Field(None, description="Seconds")
    distance: float | None = Field(None, description="Meters")
    rest_time: int | None = Field(None, description="Seconds")


class TemplateExercise(BaseModel):
    exercise_id: int | str | None = None
    name: str | None = None
    order: int = 0
    sets: list[ExerciseSet] = Field(default_factory=list)
    notes: str | None = None


class WorkoutTemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    category: str | None = None
    is_rest_day: bool = False
    estimated_duration_minutes: int | None = None
    exercises: list[TemplateExercise] = Field(default_factory=list)


class TrainingSessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    trainer_id: int | None = None
    plan_id: int | None = None
    template_id: int | None = None
    scheduled_date: date
    scheduled_time: str | None = None
    duration_minutes: int | None = None
    type: str
    location: str | None = None
    notes: str | None = None
    status: SessionStatus
    exercises_completed: list[Any] | None = None
    trainer_notes: str | None = None
    client_feedback: str | None = None
    session_rating: int | None = None
    completed_duration_minutes: int | None = None
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None


class SessionNotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: int
    client_id: int | None = None
    trainer_id: int | None = None
    notification_type: NotificationType
    title: str
    message: str | None = None
    scheduled_for: datetime
    sent: bool
    sent_at: datetime | None = None


class ResolvedWorkout(BaseModel):
    """The authoritative workout for one client on one date.

    Built fresh on every query and never persisted.
    """

    date: date
    source: ResolvedSource
    template: WorkoutTemplateRead | None = None
    session: TrainingSessionRead | None = None
    plan_id: int | None = None

    @computed_field
    @property
    def is_rest_day(self) -> bool:
        return self.source in (ResolvedSource.RESTDAY, ResolvedSource.PLAN_RESTDAY)

    @computed_field
    @property
    def can_start_workout(self) -> bool:
        if self.source not in (ResolvedSource.ADHOC, ResolvedSource.PLAN):
            return False
        if self.session is not None:
            return self.session.status in (SessionStatus.SCHEDULED, SessionStatus.CONFIRMED)
        return self.template is not None

    @classmethod
    def nothing(cls, day: date) -> "ResolvedWorkout":
        return cls(date=day, source=ResolvedSource.NONE)


class CompletionData(BaseModel):
    """What happened in a finished session."""

    exercises_completed: list[Any] = Field(default_factory=list)
    trainer_notes: str | None = None
    client_feedback: str | None = None
    session_rating: int | None = Field(None, ge=1, le=5)
    duration_minutes: int | None = Field(None, ge=0)
    extra: dict[str, Any] = Field(default_factory=dict)


class CancelRequest(BaseModel):
    reason: str | None = Field(None, max_length=1000)
