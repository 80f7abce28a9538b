from typing import Dict, List, Optional

from studyflow.core.filters import filter_subjects
from studyflow.core.models import Subject, SubjectProgress, Task
from studyflow.core.stats import subject_progress
from studyflow.services.firestore_service import FirestoreService
from studyflow.state.forms import SubjectForm


class SubjectBoard:
    """State behind the subjects page.

    Progress bars use counts recomputed from the live task list. The
    ``tasksCount``/``completedTasks`` fields stored on each subject are
    written once on create and drift afterwards.
    """

    def __init__(self, data: FirestoreService, user_id: str) -> None:
        self.data = data
        self.user_id = user_id
        self.subjects: List[Subject] = []
        self.tasks: List[Task] = []
        self.search = ""
        self.form = SubjectForm()
        self.editing: Optional[Subject] = None
        self.dialog_open = False
        self.loading = True

    def load(self) -> None:
        try:
            self.tasks, self.subjects = self.data.get_tasks_and_subjects(self.user_id)
        finally:
            self.loading = False

    def visible_subjects(self) -> List[Subject]:
        return filter_subjects(self.subjects, self.search)

    def progress(self) -> Dict[str, SubjectProgress]:
        rows = subject_progress(self.visible_subjects(), self.tasks)
        return {row.subject.id: row for row in rows}

    def empty_message(self) -> str:
        if not self.subjects:
            return "No subjects yet. Add your first subject to group your tasks."
        return "No subjects found. Try a different search."

    def open_create(self) -> None:
        self.editing = None
        self.form = SubjectForm()
        self.dialog_open = True

    def open_edit(self, subject: Subject) -> None:
        self.editing = subject
        self.form = SubjectForm.from_subject(subject)
        self.dialog_open = True

    def close_dialog(self) -> None:
        self.dialog_open = False
        self.editing = None
        self.form = SubjectForm()

    def submit(self) -> str:
        self.form.validate()
        form = self.form
        teacher = form.teacher.strip() or None

        if self.editing is not None and self.editing.id:
            self.data.update_subject(
                self.editing.id,
                {
                    "name": form.name.strip(),
                    "description": form.description.strip(),
                    "teacher": teacher,
                    "color": form.color,
                },
            )
            message = "Subject updated."
        else:
            self.data.add_subject(
                Subject(
                    name=form.name.strip(),
                    description=form.description.strip(),
                    teacher=teacher,
                    color=form.color,
                    tasks_count=0,
                    completed_tasks=0,
                    user_id=self.user_id,
                )
            )
            message = "Subject created."

        self.close_dialog()
        self.load()
        return message

    def delete(self, subject: Subject) -> None:
        # Tasks referencing the subject keep their subjectId and name.
        self.data.delete_subject(subject.id)
