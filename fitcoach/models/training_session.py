from datetime import datetime

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)

from fitcoach.db.database import Base
from fitcoach.models.enums import SessionStatus


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class TrainingSession(Base):
    """A concrete, dated workout instance with its own status lifecycle.

    Sessions are created by trainer scheduling (ad-hoc) or materialized from a
    plan; from then on only the lifecycle service changes ``status``.
    ``scheduled_time`` is kept as the ``HH:MM`` text entered by the trainer and
    parsed when a timestamp is needed.
    """

    __tablename__ = "training_sessions"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, nullable=False, index=True)
    trainer_id = Column(Integer, nullable=True, index=True)
    plan_id = Column(Integer, ForeignKey("workout_plans.id", ondelete="SET NULL"), nullable=True)
    template_id = Column(Integer, ForeignKey("workout_templates.id", ondelete="SET NULL"), nullable=True)

    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(String(16), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    type = Column(String(50), nullable=False, default="personal_training")
    location = Column(String(200), nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(
        SAEnum(
            SessionStatus,
            name="session_status",
            native_enum=False,
            values_callable=_enum_values,
            length=20,
        ),
        nullable=False,
        default=SessionStatus.SCHEDULED,
    )

    # Completion
    exercises_completed = Column(JSON, nullable=True)
    trainer_notes = Column(Text, nullable=True)
    client_feedback = Column(Text, nullable=True)
    session_rating = Column(Integer, nullable=True)
    completed_duration_minutes = Column(Integer, nullable=True)
    completion_data = Column(JSON, nullable=True)

    # Lifecycle timestamps
    confirmed_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    cancellation_reason = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_training_sessions_client_date", "client_id", "scheduled_date"),
        Index("idx_training_sessions_trainer_date", "trainer_id", "scheduled_date"),
        CheckConstraint(
            "session_rating IS NULL OR (session_rating >= 1 AND session_rating <= 5)",
            name="check_training_session_rating_range",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<TrainingSession(id={self.id}, client_id={self.client_id}, "
            f"scheduled_date={self.scheduled_date}, status={self.status})>"
        )
