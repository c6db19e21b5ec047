from datetime import date, datetime, time
from typing import Any


_TIME_FORMATS = ("%I:%M %p", "%I:%M%p", "%I %p")


def parse_date(value: Any) -> date:
    """Parse ISO 8601 date string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(f"Invalid date format: {value}")
    raise ValueError(f"Expected date, got {type(value)}")


def parse_time(value: Any) -> time:
    """Parse a wall-clock time such as ``10:00``, ``10:00:30`` or ``10:00 AM``."""
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return time.fromisoformat(text)
        except ValueError:
            pass
        for fmt in _TIME_FORMATS:
            try:
                return datetime.strptime(text.upper(), fmt).time()
            except ValueError:
                continue
        raise ValueError(f"Invalid time format: {value}")
    raise ValueError(f"Expected time, got {type(value)}")


def combine_date_time(day: Any, at: Any) -> datetime:
    """Join a date and a time of day into one naive local timestamp."""
    return datetime.combine(parse_date(day), parse_time(at))
