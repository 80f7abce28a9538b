import unittest
from datetime import datetime, timezone

from studyflow.core.models import Subject, Task
from studyflow.core.stats import (
    completion_percentage,
    compute_user_stats,
    subject_progress,
    subject_task_counts,
)


NOW = datetime(2024, 1, 15, 12, tzinfo=timezone.utc)


def _task(completed=False, day=20, subject_id="") -> Task:
    return Task(
        title="T",
        user_id="u1",
        completed=completed,
        subject_id=subject_id,
        due_date=datetime(2024, 1, day, tzinfo=timezone.utc),
    )


class UserStatsTests(unittest.TestCase):
    def test_counts(self):
        tasks = [_task(), _task(completed=True), _task(day=10), _task(completed=True, day=10)]
        stats = compute_user_stats(tasks, [Subject(name="A", user_id="u1")], NOW)
        self.assertEqual(stats.total_tasks, 4)
        self.assertEqual(stats.completed_tasks, 2)
        self.assertEqual(stats.pending_tasks, 2)
        self.assertEqual(stats.overdue_tasks, 1)
        self.assertEqual(stats.subjects_count, 1)

    def test_pending_is_total_minus_completed(self):
        for completed_flags in ([], [True], [False, False], [True, False, True]):
            tasks = [_task(completed=flag) for flag in completed_flags]
            stats = compute_user_stats(tasks, [], NOW)
            self.assertEqual(stats.pending_tasks, stats.total_tasks - stats.completed_tasks)

    def test_as_dict_uses_document_keys(self):
        stats = compute_user_stats([_task()], [], NOW)
        self.assertEqual(
            stats.as_dict(),
            {"totalTasks": 1, "completedTasks": 0, "pendingTasks": 1, "overdueTasks": 0, "subjectsCount": 0},
        )


class ProgressTests(unittest.TestCase):
    def test_completion_percentage(self):
        self.assertEqual(completion_percentage(0, 0), 0)
        self.assertEqual(completion_percentage(1, 3), 33)
        self.assertEqual(completion_percentage(2, 3), 67)
        self.assertEqual(completion_percentage(4, 4), 100)

    def test_counts_come_from_live_tasks_not_cached_fields(self):
        subject = Subject(id="math", name="Math", user_id="u1", tasks_count=10, completed_tasks=9)
        tasks = [_task(subject_id="math"), _task(subject_id="math", completed=True), _task()]
        self.assertEqual(subject_task_counts(tasks), {"math": (2, 1)})
        (row,) = subject_progress([subject], tasks)
        self.assertEqual((row.total, row.completed, row.percentage), (2, 1, 50))


if __name__ == "__main__":
    unittest.main()
