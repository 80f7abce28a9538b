from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from studyflow.core.due_dates import is_overdue
from studyflow.core.models import Subject, SubjectProgress, Task, UserStats


def completion_percentage(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return round(completed / total * 100)


def compute_user_stats(
    tasks: Sequence[Task],
    subjects: Sequence[Subject],
    now: Optional[datetime] = None,
) -> UserStats:
    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    return UserStats(
        total_tasks=total,
        completed_tasks=completed,
        pending_tasks=total - completed,
        overdue_tasks=sum(1 for task in tasks if is_overdue(task, now)),
        subjects_count=len(subjects),
    )


def subject_task_counts(tasks: Iterable[Task]) -> Dict[str, Tuple[int, int]]:
    """Live (total, completed) counts per subject id, derived from the task list."""
    counts: Dict[str, Tuple[int, int]] = {}
    for task in tasks:
        if not task.subject_id:
            continue
        total, completed = counts.get(task.subject_id, (0, 0))
        counts[task.subject_id] = (total + 1, completed + (1 if task.completed else 0))
    return counts


def subject_progress(subjects: Iterable[Subject], tasks: Iterable[Task]) -> List[SubjectProgress]:
    counts = subject_task_counts(tasks)
    results: List[SubjectProgress] = []
    for subject in subjects:
        total, completed = counts.get(subject.id or "", (0, 0))
        results.append(
            SubjectProgress(
                subject=subject,
                total=total,
                completed=completed,
                percentage=completion_percentage(completed, total),
            )
        )
    return results
