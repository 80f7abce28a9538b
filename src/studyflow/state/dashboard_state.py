from datetime import datetime
from typing import List, Optional

from studyflow.core.filters import upcoming_tasks
from studyflow.core.models import Subject, SubjectProgress, Task, UserStats
from studyflow.core.stats import completion_percentage, compute_user_stats, subject_progress
from studyflow.services.firestore_service import FirestoreService


UPCOMING_LIMIT = 5


class DashboardState:
    def __init__(self, data: FirestoreService, user_id: str) -> None:
        self.data = data
        self.user_id = user_id
        self.tasks: List[Task] = []
        self.subjects: List[Subject] = []
        self.stats = UserStats()
        self.loading = True

    def load(self, now: Optional[datetime] = None) -> None:
        # On failure the previous lists and stats stay in place.
        try:
            tasks, subjects = self.data.get_tasks_and_subjects(self.user_id)
            self.tasks, self.subjects = tasks, subjects
            self.stats = compute_user_stats(tasks, subjects, now)
        finally:
            self.loading = False

    @property
    def completion(self) -> int:
        return completion_percentage(self.stats.completed_tasks, self.stats.total_tasks)

    def upcoming(self) -> List[Task]:
        return upcoming_tasks(self.tasks, limit=UPCOMING_LIMIT)

    def subject_progress(self) -> List[SubjectProgress]:
        return subject_progress(self.subjects, self.tasks)

    def mark_complete(self, task: Task) -> None:
        self.data.set_task_completed(task.id, True)
