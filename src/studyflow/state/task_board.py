from typing import List, Optional

from studyflow.core.due_dates import parse_due_date
from studyflow.core.filters import TaskFilters, filter_tasks
from studyflow.core.models import Subject, Task
from studyflow.services.firestore_service import FirestoreService
from studyflow.state.forms import TaskForm


class TaskBoard:
    """State behind the tasks page: loaded records, filters and the edit dialog.

    The local lists only ever reflect what the backend returned. ``submit``
    reloads itself; after ``toggle`` or ``delete`` the caller reloads, so a
    failed read is not reported as a failed write.
    """

    def __init__(self, data: FirestoreService, user_id: str) -> None:
        self.data = data
        self.user_id = user_id
        self.tasks: List[Task] = []
        self.subjects: List[Subject] = []
        self.filters = TaskFilters()
        self.form = TaskForm()
        self.editing: Optional[Task] = None
        self.dialog_open = False
        self.loading = True

    def load(self) -> None:
        try:
            self.tasks, self.subjects = self.data.get_tasks_and_subjects(self.user_id)
        finally:
            self.loading = False

    def visible_tasks(self) -> List[Task]:
        return filter_tasks(self.tasks, self.filters)

    def empty_message(self) -> str:
        if not self.tasks:
            return "No tasks yet. Add your first task to start organising your studies."
        return "No tasks found. Try adjusting the filters or create a new task."

    def subject_name(self, subject_id: str) -> str:
        for subject in self.subjects:
            if subject.id == subject_id:
                return subject.name
        return ""

    def open_create(self) -> None:
        self.editing = None
        self.form = TaskForm()
        self.dialog_open = True

    def open_edit(self, task: Task) -> None:
        self.editing = task
        self.form = TaskForm.from_task(task)
        self.dialog_open = True

    def close_dialog(self) -> None:
        self.dialog_open = False
        self.editing = None
        self.form = TaskForm()

    def submit(self) -> str:
        self.form.validate()
        form = self.form
        fields = {
            "title": form.title.strip(),
            "description": form.description.strip(),
            "subject": self.subject_name(form.subject_id),
            "subjectId": form.subject_id,
            "dueDate": parse_due_date(form.due_date),
            "priority": form.priority,
        }

        if self.editing is not None and self.editing.id:
            self.data.update_task(self.editing.id, fields)
            message = "Task updated."
        else:
            self.data.add_task(
                Task(
                    title=fields["title"],
                    description=fields["description"],
                    subject=fields["subject"],
                    subject_id=fields["subjectId"],
                    due_date=fields["dueDate"],
                    priority=fields["priority"],
                    completed=False,
                    user_id=self.user_id,
                )
            )
            message = "Task created."

        self.close_dialog()
        self.load()
        return message

    def toggle(self, task: Task) -> bool:
        completed = not task.completed
        self.data.set_task_completed(task.id, completed)
        return completed

    def delete(self, task: Task) -> None:
        self.data.delete_task(task.id)

    @staticmethod
    def toggle_message(completed: bool) -> str:
        return "Task completed. Nice progress!" if completed else "Task reopened."
