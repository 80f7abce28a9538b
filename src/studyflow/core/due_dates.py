import math
from datetime import datetime, timezone
from typing import Optional

from studyflow.core.models import Task


DATE_FMT = "%Y-%m-%d"
SECONDS_PER_DAY = 86400


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_due_date(raw: str) -> datetime:
    """Parse a YYYY-MM-DD form value into a UTC midnight timestamp."""
    parsed = datetime.strptime(raw.strip(), DATE_FMT)
    return parsed.replace(tzinfo=timezone.utc)


def format_due_date(value: Optional[datetime]) -> str:
    if not hasattr(value, "strftime"):
        return "-"
    return value.strftime(DATE_FMT)


def days_until(due: datetime, now: Optional[datetime] = None) -> int:
    now = _aware(now or datetime.now(timezone.utc))
    delta = _aware(due) - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def is_overdue(task: Task, now: Optional[datetime] = None) -> bool:
    if task.completed or task.due_date is None:
        return False
    return days_until(task.due_date, now) < 0


def is_due_today(task: Task, now: Optional[datetime] = None) -> bool:
    if task.completed or task.due_date is None:
        return False
    return days_until(task.due_date, now) == 0


def due_label(days: int) -> str:
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days < 0:
        overdue = -days
        return f"{overdue} day{'s' if overdue > 1 else ''} overdue"
    return f"{days} days"


def due_soon_badge(task: Task, now: Optional[datetime] = None) -> Optional[str]:
    """Badge text for the task list: overdue, due today, or 1-3 days left."""
    if task.completed or task.due_date is None:
        return None
    days = days_until(task.due_date, now)
    if days < 0:
        return "Overdue"
    if days == 0:
        return "Due today"
    if days <= 3:
        return f"{days} day{'s' if days > 1 else ''}"
    return None
