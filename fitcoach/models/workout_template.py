from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from fitcoach.db.database import Base


class WorkoutTemplate(Base):
    """A named, ordered set of exercises, or a rest-day marker.

    ``exercises`` holds the ordered exercise list, each entry carrying its own
    ``sets`` configuration. Templates are authored elsewhere and only read here.
    """

    __tablename__ = "workout_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    is_rest_day = Column(Boolean, nullable=False, default=False)
    estimated_duration_minutes = Column(Integer, nullable=True)
    exercises = Column(JSON, nullable=False, default=list)
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<WorkoutTemplate(id={self.id}, name='{self.name}', is_rest_day={self.is_rest_day})>"
