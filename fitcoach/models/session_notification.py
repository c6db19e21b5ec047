from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)

from fitcoach.db.database import Base
from fitcoach.models.enums import NotificationType


class SessionNotification(Base):
    """A time-stamped notification queued for the external notifier.

    At most one unsent ``reminder`` may exist per session; the partial unique
    index backs up the check done by the reminder scheduler.
    """

    __tablename__ = "session_notifications"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(
        Integer,
        ForeignKey("training_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    client_id = Column(Integer, nullable=True)
    trainer_id = Column(Integer, nullable=True)
    notification_type = Column(
        SAEnum(
            NotificationType,
            name="notification_type",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            length=20,
        ),
        nullable=False,
    )
    title = Column(String(200), nullable=False, default="")
    message = Column(Text, nullable=True)
    scheduled_for = Column(DateTime, nullable=False)
    sent = Column(Boolean, nullable=False, default=False)
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_session_notifications_due", "sent", "scheduled_for"),
        Index(
            "uq_session_notifications_unsent_reminder",
            "session_id",
            "notification_type",
            unique=True,
            sqlite_where=text("sent = 0 AND notification_type = 'reminder'"),
            postgresql_where=text("sent = false AND notification_type = 'reminder'"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<SessionNotification(id={self.id}, session_id={self.session_id}, "
            f"type={self.notification_type}, scheduled_for={self.scheduled_for}, sent={self.sent})>"
        )
