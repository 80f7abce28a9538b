from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


PRIORITIES = ("low", "medium", "high")
SUBJECT_COLORS = ("blue", "green", "purple", "orange", "pink", "indigo", "red", "yellow")
DEFAULT_COLOR = "blue"
DEFAULT_PRIORITY = "medium"


@dataclass
class Subject:
    name: str
    user_id: str
    description: str = ""
    color: str = DEFAULT_COLOR
    teacher: Optional[str] = None
    # Cached counters; never kept in sync with the tasks collection.
    tasks_count: int = 0
    completed_tasks: int = 0
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc_id: str, data: Dict[str, Any]) -> "Subject":
        return cls(
            id=doc_id,
            name=data.get("name") or "",
            description=data.get("description") or "",
            color=data.get("color") or DEFAULT_COLOR,
            teacher=data.get("teacher"),
            tasks_count=int(data.get("tasksCount") or 0),
            completed_tasks=int(data.get("completedTasks") or 0),
            user_id=data.get("userId") or "",
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_doc(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "tasksCount": self.tasks_count,
            "completedTasks": self.completed_tasks,
            "userId": self.user_id,
        }
        if self.teacher:
            doc["teacher"] = self.teacher
        return doc


@dataclass
class Task:
    title: str
    user_id: str
    due_date: datetime
    description: str = ""
    subject: str = ""
    subject_id: str = ""
    priority: str = DEFAULT_PRIORITY
    completed: bool = False
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc_id: str, data: Dict[str, Any]) -> "Task":
        return cls(
            id=doc_id,
            title=data.get("title") or "",
            description=data.get("description") or "",
            subject=data.get("subject") or "",
            subject_id=data.get("subjectId") or "",
            due_date=data.get("dueDate"),
            priority=data.get("priority") or DEFAULT_PRIORITY,
            completed=bool(data.get("completed", False)),
            user_id=data.get("userId") or "",
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_doc(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "subject": self.subject,
            "subjectId": self.subject_id,
            "dueDate": self.due_date,
            "priority": self.priority,
            "completed": self.completed,
            "userId": self.user_id,
        }


@dataclass
class UserStats:
    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    overdue_tasks: int = 0
    subjects_count: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "pendingTasks": self.pending_tasks,
            "overdueTasks": self.overdue_tasks,
            "subjectsCount": self.subjects_count,
        }


@dataclass
class SubjectProgress:
    subject: Subject
    total: int = 0
    completed: int = 0
    percentage: int = 0
