from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from studyflow.core.models import Subject, Task


ALL = "all"
STATUS_OPTIONS = (ALL, "pending", "completed")
PRIORITY_OPTIONS = (ALL, "high", "medium", "low")


@dataclass
class TaskFilters:
    search: str = ""
    subject_id: str = ALL
    status: str = ALL
    priority: str = ALL

    def matches(self, task: Task) -> bool:
        term = self.search.strip().lower()
        if term and term not in task.title.lower() and term not in task.description.lower():
            return False
        if self.subject_id != ALL and task.subject_id != self.subject_id:
            return False
        if self.status == "completed" and not task.completed:
            return False
        if self.status == "pending" and task.completed:
            return False
        if self.priority != ALL and task.priority != self.priority:
            return False
        return True

    def reset(self) -> None:
        self.search = ""
        self.subject_id = ALL
        self.status = ALL
        self.priority = ALL


def filter_tasks(tasks: Iterable[Task], filters: TaskFilters) -> List[Task]:
    return [task for task in tasks if filters.matches(task)]


def filter_subjects(subjects: Iterable[Subject], search: str) -> List[Subject]:
    term = search.strip().lower()
    if not term:
        return list(subjects)
    return [
        subject
        for subject in subjects
        if term in subject.name.lower() or term in (subject.description or "").lower()
    ]


def upcoming_tasks(tasks: Iterable[Task], limit: Optional[int] = None) -> List[Task]:
    """Pending tasks ordered by due date, earliest first."""
    far_future = datetime.max.replace(tzinfo=timezone.utc)
    pending = [task for task in tasks if not task.completed]
    pending.sort(key=lambda task: task.due_date or far_future)
    if limit is not None:
        return pending[:limit]
    return pending
