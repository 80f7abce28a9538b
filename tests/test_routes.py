import unittest

from studyflow.ui.routes import guard, is_known, normalize


class RouteGuardTests(unittest.TestCase):
    def test_protected_routes_require_session(self):
        for route in ("/dashboard", "/subjects", "/tasks", "/profile"):
            self.assertEqual(guard(route, is_authenticated=False), "/login")
            self.assertIsNone(guard(route, is_authenticated=True))

    def test_auth_routes_redirect_signed_in_users(self):
        for route in ("/", "/login", "/register"):
            self.assertEqual(guard(route, is_authenticated=True), "/dashboard")
            self.assertIsNone(guard(route, is_authenticated=False))

    def test_unknown_routes_are_not_redirected(self):
        self.assertIsNone(guard("/nowhere", is_authenticated=False))
        self.assertIsNone(guard("/nowhere", is_authenticated=True))
        self.assertFalse(is_known("/nowhere"))

    def test_normalize(self):
        self.assertEqual(normalize("/tasks/"), "/tasks")
        self.assertEqual(normalize("/tasks?x=1"), "/tasks")
        self.assertEqual(normalize(""), "/")
        self.assertEqual(guard("/dashboard/", is_authenticated=False), "/login")


if __name__ == "__main__":
    unittest.main()
