import logging
from typing import Callable, List, Optional

from studyflow.services.auth_service import AuthResult, AuthServiceError, FirebaseAuthService
from studyflow.state.session_state import SessionState


logger = logging.getLogger(__name__)

AuthListener = Callable[[Optional[SessionState]], None]


class AuthProvider:
    """Holds the signed-in session and forwards account actions to the identity service.

    Listeners registered with ``subscribe`` are called with the current
    session (or ``None``) whenever it changes. Service errors propagate
    unchanged.
    """

    def __init__(self, auth_service: FirebaseAuthService) -> None:
        self.auth_service = auth_service
        self.session = SessionState()
        self.loading = True
        self._listeners: List[AuthListener] = []

    @property
    def user(self) -> Optional[SessionState]:
        return self.session if self.session.is_authenticated else None

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        self.loading = False
        self._notify()

    def login(self, email: str, password: str) -> None:
        result = self.auth_service.sign_in(email, password)
        self._apply(result)

    def register(self, email: str, password: str, display_name: str) -> None:
        # The session is applied before the name is set, so a failed profile
        # update still leaves the new account signed in.
        result = self.auth_service.sign_up(email, password)
        self._apply(result, notify=False)
        name = (display_name or "").strip()
        try:
            if name:
                updated = self.auth_service.update_profile(result.id_token, display_name=name)
                self.session.display_name = updated or name
        finally:
            self._notify()

    def logout(self) -> None:
        uid = self.session.uid
        self.session.clear()
        logger.info("Signed out %s", uid)
        self._notify()

    def update_user_profile(self, *, display_name: Optional[str] = None) -> None:
        if not self.session.is_authenticated:
            raise AuthServiceError("No user logged in")
        updated = self.auth_service.update_profile(self.session.id_token, display_name=display_name)
        if display_name is not None:
            self.session.display_name = updated if updated is not None else display_name
        self._notify()

    def delete_account(self) -> None:
        if not self.session.is_authenticated:
            raise AuthServiceError("No user logged in")
        uid = self.session.uid
        self.auth_service.delete_account(self.session.id_token)
        logger.info("Deleted account %s", uid)
        self.session.clear()
        self._notify()

    def _apply(self, result: AuthResult, notify: bool = True) -> None:
        self.session.uid = result.uid
        self.session.email = result.email
        self.session.display_name = result.display_name
        self.session.id_token = result.id_token
        self.session.refresh_token = result.refresh_token
        self.loading = False
        if notify:
            self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.user)
