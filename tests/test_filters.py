import unittest
from datetime import datetime, timezone

from studyflow.core.filters import TaskFilters, filter_subjects, filter_tasks, upcoming_tasks
from studyflow.core.models import Subject, Task
from studyflow.core.priority import priority_badge, priority_label, priority_variant


def _task(title, priority="medium", completed=False, subject_id="", description="", day=1) -> Task:
    return Task(
        title=title,
        description=description,
        priority=priority,
        completed=completed,
        subject_id=subject_id,
        user_id="u1",
        due_date=datetime(2024, 1, day, tzinfo=timezone.utc),
    )


class TaskFilterTests(unittest.TestCase):
    def setUp(self):
        self.tasks = [
            _task("Math Exam", priority="high", subject_id="math", description="Chapters 1-5"),
            _task("History", priority="low", completed=True, subject_id="hist"),
        ]

    def test_priority_filter(self):
        result = filter_tasks(self.tasks, TaskFilters(priority="high"))
        self.assertEqual([t.title for t in result], ["Math Exam"])

    def test_default_filters_keep_everything(self):
        self.assertEqual(len(filter_tasks(self.tasks, TaskFilters())), 2)

    def test_search_matches_title_and_description_case_insensitive(self):
        self.assertEqual(len(filter_tasks(self.tasks, TaskFilters(search="math"))), 1)
        self.assertEqual(len(filter_tasks(self.tasks, TaskFilters(search="CHAPTERS"))), 1)
        self.assertEqual(len(filter_tasks(self.tasks, TaskFilters(search="physics"))), 0)

    def test_stored_nulls_are_searchable(self):
        task = Task.from_doc("t9", {"title": None, "description": None, "userId": "u1"})
        subject = Subject.from_doc("s9", {"name": None, "description": None, "userId": "u1"})
        self.assertEqual((task.title, task.description), ("", ""))
        self.assertEqual(filter_tasks([task], TaskFilters(search="ma")), [])
        self.assertEqual(filter_subjects([subject], "ma"), [])

    def test_status_filter(self):
        self.assertEqual([t.title for t in filter_tasks(self.tasks, TaskFilters(status="completed"))], ["History"])
        self.assertEqual([t.title for t in filter_tasks(self.tasks, TaskFilters(status="pending"))], ["Math Exam"])

    def test_filters_combine_with_and(self):
        self.assertEqual(filter_tasks(self.tasks, TaskFilters(subject_id="hist", priority="high")), [])
        result = filter_tasks(self.tasks, TaskFilters(subject_id="math", status="pending", search="exam"))
        self.assertEqual([t.title for t in result], ["Math Exam"])

    def test_reset(self):
        filters = TaskFilters(search="x", subject_id="math", status="pending", priority="low")
        filters.reset()
        self.assertEqual(filters, TaskFilters())


class SubjectFilterTests(unittest.TestCase):
    def test_search_over_name_and_description(self):
        subjects = [
            Subject(name="Mathematics", description="Algebra", user_id="u1"),
            Subject(name="History", description="Industrial revolution", user_id="u1"),
        ]
        self.assertEqual([s.name for s in filter_subjects(subjects, "algebra")], ["Mathematics"])
        self.assertEqual([s.name for s in filter_subjects(subjects, "hist")], ["History"])
        self.assertEqual(len(filter_subjects(subjects, "  ")), 2)


class UpcomingTests(unittest.TestCase):
    def test_pending_only_sorted_by_due_date(self):
        tasks = [_task("late", day=20), _task("done", completed=True, day=2), _task("soon", day=5)]
        self.assertEqual([t.title for t in upcoming_tasks(tasks)], ["soon", "late"])
        self.assertEqual([t.title for t in upcoming_tasks(tasks, limit=1)], ["soon"])


class PriorityTests(unittest.TestCase):
    def test_badges(self):
        self.assertEqual(priority_badge("high"), ("destructive", "High"))
        self.assertEqual(priority_badge("medium"), ("warning", "Medium"))
        self.assertEqual(priority_badge("low"), ("secondary", "Low"))

    def test_unknown_priority_falls_back_to_low(self):
        self.assertEqual(priority_variant("urgent"), "secondary")
        self.assertEqual(priority_label("urgent"), "Low")


if __name__ == "__main__":
    unittest.main()
