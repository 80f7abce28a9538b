from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional
import requests
from requests import RequestException

from studyflow.config.settings import settings


logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    pass


@dataclass
class AuthResult:
    uid: str
    email: str
    id_token: str
    refresh_token: str
    display_name: Optional[str] = None


class FirebaseAuthService:
    """Thin client for the Firebase Identity Toolkit REST API.

    Errors reported by the service are raised as AuthServiceError with the
    service's own message key (EMAIL_EXISTS, INVALID_LOGIN_CREDENTIALS,
    CREDENTIAL_TOO_OLD_LOGIN_AGAIN, ...). Nothing is retried.
    """

    SIGN_UP_PATH = "/accounts:signUp"
    LOGIN_PATH = "/accounts:signInWithPassword"
    UPDATE_PATH = "/accounts:update"
    DELETE_PATH = "/accounts:delete"
    LOOKUP_PATH = "/accounts:lookup"

    def __init__(self, endpoint: str, api_key: str, timeout: float = 15) -> None:
        if not endpoint:
            raise AuthServiceError("Missing FIREBASE_AUTH_ENDPOINT in environment")
        if not api_key:
            raise AuthServiceError("Missing FIREBASE_API_KEY in environment")
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "FirebaseAuthService":
        return cls(
            settings.firebase_auth_endpoint,
            settings.firebase_api_key,
            timeout=settings.auth_timeout_seconds,
        )

    def sign_up(self, email: str, password: str, display_name: Optional[str] = None) -> AuthResult:
        payload = {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        }
        result = self._to_result(self._post(self.SIGN_UP_PATH, payload), email)
        logger.info("Registered account %s", result.uid)
        if display_name and display_name.strip():
            result.display_name = self.update_profile(result.id_token, display_name=display_name.strip())
        return result

    def sign_in(self, email: str, password: str) -> AuthResult:
        payload = {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        }
        result = self._to_result(self._post(self.LOGIN_PATH, payload), email)
        if not result.display_name:
            result.display_name = self.lookup_display_name(result.id_token)
        logger.info("Signed in %s", result.uid)
        return result

    def update_profile(self, id_token: str, *, display_name: Optional[str] = None) -> Optional[str]:
        payload: Dict[str, Any] = {"idToken": id_token, "returnSecureToken": False}
        if display_name is not None:
            payload["displayName"] = display_name
        data = self._post(self.UPDATE_PATH, payload)
        return data.get("displayName")

    def lookup_display_name(self, id_token: str) -> Optional[str]:
        data = self._post(self.LOOKUP_PATH, {"idToken": id_token})
        users = data.get("users") or []
        if not users:
            return None
        return users[0].get("displayName")

    def delete_account(self, id_token: str) -> None:
        self._post(self.DELETE_PATH, {"idToken": id_token})

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.endpoint}{path}"
        try:
            res = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except RequestException as exc:
            logger.error("Identity service unreachable: %s", exc)
            raise AuthServiceError("NETWORK_REQUEST_FAILED") from exc
        try:
            data = res.json()
        except ValueError:
            raise AuthServiceError("NETWORK_REQUEST_FAILED")

        if res.status_code >= 400:
            error = data.get("error") or {}
            raise AuthServiceError(str(error.get("message") or "AUTH_ERROR"))

        return data

    @staticmethod
    def _to_result(data: Dict[str, Any], email: str) -> AuthResult:
        uid = str(data.get("localId") or "")
        if not uid:
            raise AuthServiceError("INVALID_AUTH_RESPONSE")
        return AuthResult(
            uid=uid,
            email=str(data.get("email") or email),
            id_token=str(data.get("idToken") or ""),
            refresh_token=str(data.get("refreshToken") or ""),
            display_name=data.get("displayName") or None,
        )
