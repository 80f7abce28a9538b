import unittest
from datetime import datetime, timezone

from fakes import FakeAuthService, FakeFirestoreClient, seed_subject, seed_task
from studyflow.services.auth_service import AuthServiceError
from studyflow.services.firestore_service import FirestoreService, FirestoreServiceError
from studyflow.state.auth_provider import AuthProvider
from studyflow.state.dashboard_state import DashboardState
from studyflow.state.profile_state import ProfileState


NOW = datetime(2024, 1, 15, 12, tzinfo=timezone.utc)


def _dt(day: int) -> datetime:
    return datetime(2024, 1, day, tzinfo=timezone.utc)


class DashboardStateTests(unittest.TestCase):
    def setUp(self):
        self.client = FakeFirestoreClient()
        seed_subject(self.client, "math", name="Math")
        seed_task(self.client, "late", due=_dt(10), subject_id="math")
        seed_task(self.client, "soon", due=_dt(16))
        seed_task(self.client, "done", due=_dt(12), completed=True, subject_id="math")
        self.state = DashboardState(FirestoreService("", client=self.client), "u1")
        self.state.load(NOW)

    def test_stats(self):
        stats = self.state.stats
        self.assertEqual((stats.total_tasks, stats.completed_tasks, stats.pending_tasks), (3, 1, 2))
        self.assertEqual(stats.overdue_tasks, 1)
        self.assertEqual(self.state.completion, 33)

    def test_upcoming_is_pending_by_due_date(self):
        self.assertEqual([t.id for t in self.state.upcoming()], ["late", "soon"])

    def test_subject_progress(self):
        (row,) = self.state.subject_progress()
        self.assertEqual((row.total, row.completed), (2, 1))

    def test_mark_complete_then_reload(self):
        task = [t for t in self.state.tasks if t.id == "soon"][0]
        self.state.mark_complete(task)
        self.state.load(NOW)
        self.assertEqual(self.state.stats.completed_tasks, 2)
        self.assertEqual([t.id for t in self.state.upcoming()], ["late"])

    def test_failed_load_keeps_previous_state(self):
        self.client.fail_reads = True
        with self.assertRaises(FirestoreServiceError):
            self.state.load(NOW)
        self.assertEqual(self.state.stats.total_tasks, 3)


class ProfileStateTests(unittest.TestCase):
    def setUp(self):
        self.client = FakeFirestoreClient()
        self.auth_service = FakeAuthService()
        self.auth = AuthProvider(self.auth_service)
        self.auth.register("ana@example.com", "secret1", "Ana")
        uid = self.auth.session.uid
        seed_subject(self.client, "s1", user_id=uid)
        seed_task(self.client, "t1", user_id=uid, completed=True)
        seed_task(self.client, "t2", user_id=uid)
        seed_task(self.client, "other", user_id="someone-else")
        self.state = ProfileState(FirestoreService("", client=self.client), self.auth)
        self.state.load()

    def test_totals(self):
        self.assertEqual(len(self.state.tasks), 2)
        self.assertEqual(len(self.state.completed_tasks), 1)
        self.assertEqual(len(self.state.pending_tasks), 1)
        self.assertEqual(len(self.state.subjects), 1)

    def test_rename(self):
        self.state.rename("  Ana Maria ")
        self.assertEqual(self.auth.session.display_name, "Ana Maria")

    def test_delete_account_removes_data_then_identity(self):
        self.state.delete_account()
        self.assertEqual(set(self.client.docs("tasks")), {"other"})
        self.assertEqual(self.client.docs("subjects"), {})
        self.assertIsNone(self.auth.user)

    def test_stale_session_after_data_deletion(self):
        self.auth_service.delete_error = "CREDENTIAL_TOO_OLD_LOGIN_AGAIN"
        with self.assertRaises(AuthServiceError):
            self.state.delete_account()
        # Data is already gone while the account survives.
        self.assertEqual(set(self.client.docs("tasks")), {"other"})
        self.assertIsNotNone(self.auth.user)


if __name__ == "__main__":
    unittest.main()
