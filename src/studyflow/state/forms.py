from dataclasses import dataclass

from studyflow.core.due_dates import format_due_date, parse_due_date
from studyflow.core.models import DEFAULT_COLOR, DEFAULT_PRIORITY, PRIORITIES, SUBJECT_COLORS, Subject, Task


class FormError(ValueError):
    pass


@dataclass
class TaskForm:
    title: str = ""
    description: str = ""
    subject_id: str = ""
    due_date: str = ""
    priority: str = DEFAULT_PRIORITY

    @classmethod
    def from_task(cls, task: Task) -> "TaskForm":
        return cls(
            title=task.title,
            description=task.description,
            subject_id=task.subject_id,
            due_date=format_due_date(task.due_date) if task.due_date else "",
            priority=task.priority,
        )

    def validate(self) -> None:
        if not self.title.strip():
            raise FormError("Task title is required.")
        if not self.due_date.strip():
            raise FormError("Due date is required.")
        try:
            parse_due_date(self.due_date)
        except ValueError as exc:
            raise FormError("Invalid date format. Use YYYY-MM-DD.") from exc
        if self.priority not in PRIORITIES:
            raise FormError(f"Unknown priority: {self.priority}")


@dataclass
class SubjectForm:
    name: str = ""
    description: str = ""
    teacher: str = ""
    color: str = DEFAULT_COLOR

    @classmethod
    def from_subject(cls, subject: Subject) -> "SubjectForm":
        return cls(
            name=subject.name,
            description=subject.description,
            teacher=subject.teacher or "",
            color=subject.color,
        )

    def validate(self) -> None:
        if not self.name.strip():
            raise FormError("Subject name is required.")
        if self.color not in SUBJECT_COLORS:
            raise FormError(f"Unknown color: {self.color}")
