import unittest
from unittest import mock

from requests import ConnectionError as RequestsConnectionError

from studyflow.services.auth_service import AuthServiceError, FirebaseAuthService


def _response(status_code: int, payload: dict) -> mock.Mock:
    res = mock.Mock()
    res.status_code = status_code
    res.json.return_value = payload
    return res


SIGN_IN_OK = {
    "localId": "uid-1",
    "email": "ana@example.com",
    "idToken": "id-token",
    "refreshToken": "refresh-token",
    "displayName": "Ana",
}


class FirebaseAuthServiceTests(unittest.TestCase):
    def setUp(self):
        self.service = FirebaseAuthService("https://auth.example/v1/", "key-123", timeout=5)
        patcher = mock.patch("studyflow.services.auth_service.requests.post")
        self.post = patcher.start()
        self.addCleanup(patcher.stop)

    def test_requires_api_key(self):
        with self.assertRaises(AuthServiceError):
            FirebaseAuthService("https://auth.example/v1", "")

    def test_sign_in(self):
        self.post.return_value = _response(200, SIGN_IN_OK)
        result = self.service.sign_in("ana@example.com", "secret")

        self.assertEqual(result.uid, "uid-1")
        self.assertEqual(result.id_token, "id-token")
        self.assertEqual(result.display_name, "Ana")
        args, kwargs = self.post.call_args
        self.assertEqual(args[0], "https://auth.example/v1/accounts:signInWithPassword")
        self.assertEqual(kwargs["params"], {"key": "key-123"})
        self.assertEqual(kwargs["timeout"], 5)
        self.assertTrue(kwargs["json"]["returnSecureToken"])

    def test_sign_in_looks_up_missing_display_name(self):
        no_name = {**SIGN_IN_OK, "displayName": ""}
        self.post.side_effect = [
            _response(200, no_name),
            _response(200, {"users": [{"localId": "uid-1", "displayName": "Ana"}]}),
        ]
        result = self.service.sign_in("ana@example.com", "secret")
        self.assertEqual(result.display_name, "Ana")
        self.assertTrue(self.post.call_args[0][0].endswith("/accounts:lookup"))

    def test_service_error_message_passes_through(self):
        self.post.return_value = _response(400, {"error": {"code": 400, "message": "INVALID_LOGIN_CREDENTIALS"}})
        with self.assertRaises(AuthServiceError) as ctx:
            self.service.sign_in("ana@example.com", "wrong")
        self.assertEqual(str(ctx.exception), "INVALID_LOGIN_CREDENTIALS")

    def test_network_failure(self):
        self.post.side_effect = RequestsConnectionError("down")
        with self.assertRaises(AuthServiceError) as ctx:
            self.service.sign_in("ana@example.com", "secret")
        self.assertEqual(str(ctx.exception), "NETWORK_REQUEST_FAILED")
        self.assertEqual(self.post.call_count, 1)

    def test_sign_up_sets_display_name(self):
        self.post.side_effect = [
            _response(200, {**SIGN_IN_OK, "displayName": None}),
            _response(200, {"localId": "uid-1", "displayName": "Ana"}),
        ]
        result = self.service.sign_up("ana@example.com", "secret", display_name=" Ana ")

        self.assertEqual(result.display_name, "Ana")
        update_call = self.post.call_args_list[1]
        self.assertTrue(update_call[0][0].endswith("/accounts:update"))
        self.assertEqual(update_call[1]["json"]["displayName"], "Ana")
        self.assertEqual(update_call[1]["json"]["idToken"], "id-token")

    def test_delete_requires_recent_login_error_is_surfaced(self):
        self.post.return_value = _response(400, {"error": {"message": "CREDENTIAL_TOO_OLD_LOGIN_AGAIN"}})
        with self.assertRaises(AuthServiceError) as ctx:
            self.service.delete_account("id-token")
        self.assertEqual(str(ctx.exception), "CREDENTIAL_TOO_OLD_LOGIN_AGAIN")


if __name__ == "__main__":
    unittest.main()
