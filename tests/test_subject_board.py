import unittest

from fakes import FakeFirestoreClient, seed_subject, seed_task
from studyflow.services.firestore_service import FirestoreService
from studyflow.state.forms import FormError, SubjectForm
from studyflow.state.subject_board import SubjectBoard


class SubjectBoardTests(unittest.TestCase):
    def setUp(self):
        self.client = FakeFirestoreClient()
        seed_subject(self.client, "math", name="Mathematics", description="Algebra")
        seed_subject(self.client, "hist", name="History")
        seed_task(self.client, "t1", subject_id="math", completed=True)
        seed_task(self.client, "t2", subject_id="math")
        self.board = SubjectBoard(FirestoreService("", client=self.client), "u1")
        self.board.load()

    def test_search(self):
        self.board.search = "algebra"
        self.assertEqual([s.id for s in self.board.visible_subjects()], ["math"])

    def test_progress_is_derived_from_tasks(self):
        progress = self.board.progress()
        self.assertEqual((progress["math"].total, progress["math"].completed, progress["math"].percentage), (2, 1, 50))
        self.assertEqual(progress["hist"].total, 0)

    def test_create(self):
        self.board.open_create()
        self.board.form = SubjectForm(name="Physics", teacher="  ", color="green")
        self.assertEqual(self.board.submit(), "Subject created.")
        created = [s for s in self.board.subjects if s.name == "Physics"][0]
        self.assertIsNone(created.teacher)
        self.assertEqual(created.color, "green")

    def test_edit(self):
        target = [s for s in self.board.subjects if s.id == "hist"][0]
        self.board.open_edit(target)
        self.board.form.teacher = "Ms. Rivera"
        self.assertEqual(self.board.submit(), "Subject updated.")
        self.assertEqual(self.client.docs("subjects")["hist"]["teacher"], "Ms. Rivera")

    def test_validation(self):
        self.board.open_create()
        self.board.form = SubjectForm(name=" ")
        with self.assertRaises(FormError):
            self.board.submit()
        self.board.form = SubjectForm(name="Art", color="teal")
        with self.assertRaises(FormError):
            self.board.submit()

    def test_cached_counts_drift_from_live_tasks(self):
        target = [s for s in self.board.subjects if s.id == "math"][0]
        self.assertEqual((target.tasks_count, target.completed_tasks), (0, 0))
        self.assertEqual(self.board.progress()["math"].total, 2)

    def test_delete_leaves_tasks(self):
        target = [s for s in self.board.subjects if s.id == "math"][0]
        self.board.delete(target)
        self.board.load()

        self.assertEqual([s.id for s in self.board.subjects], ["hist"])
        self.assertEqual({t.subject_id for t in self.board.tasks}, {"math"})


if __name__ == "__main__":
    unittest.main()
