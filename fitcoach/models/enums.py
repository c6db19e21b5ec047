"""Enumerations shared by the scheduling models and services."""
from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle states of a training session."""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class SessionAction(str, Enum):
    """User- or job-initiated lifecycle actions."""
    CONFIRM = "confirm"
    COMPLETE = "complete"
    CANCEL = "cancel"
    NO_SHOW = "no_show"


class NotificationType(str, Enum):
    """Kinds of session notifications handed to the external notifier."""
    REMINDER = "reminder"
    CONFIRMATION = "confirmation"
    CANCELLATION = "cancellation"
    COMPLETION = "completion"
    NO_SHOW = "no_show"


class ResolvedSource(str, Enum):
    """Where the authoritative workout for a day came from."""
    ADHOC = "adhoc"
    RESTDAY = "restday"
    PLAN = "plan"
    PLAN_RESTDAY = "plan+restday"
    NONE = "none"
