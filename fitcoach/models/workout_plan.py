from datetime import date, datetime

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
)

from fitcoach.db.database import Base


class WorkoutPlan(Base):
    """A client's recurring weekly assignment of templates over a date range.

    ``schedule_data`` maps a weekday name to a template id (or null for a day
    with nothing assigned). Keys are matched case-insensitively when resolved.
    """

    __tablename__ = "workout_plans"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, nullable=False, index=True)
    trainer_id = Column(Integer, nullable=True, index=True)
    name = Column(String(200), nullable=False, default="")
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    schedule_data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_workout_plans_client_range", "client_id", "start_date", "end_date"),
        CheckConstraint("end_date >= start_date", name="check_workout_plan_date_range"),
    )

    def is_active_on(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def __repr__(self) -> str:
        return (
            f"<WorkoutPlan(id={self.id}, client_id={self.client_id}, "
            f"start_date={self.start_date}, end_date={self.end_date})>"
        )
