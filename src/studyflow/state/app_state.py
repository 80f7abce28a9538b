from dataclasses import dataclass
from typing import Optional

from studyflow.services.firestore_service import FirestoreService
from studyflow.state.auth_provider import AuthProvider
from studyflow.state.session_state import SessionState


@dataclass
class AppState:
    """Per-page context created once at the application root."""

    auth: AuthProvider
    data: FirestoreService
    # One-shot message carried across a navigation, shown by the next view.
    notice: Optional[str] = None

    @property
    def session(self) -> SessionState:
        return self.auth.session

    @property
    def uid(self) -> Optional[str]:
        return self.session.uid if self.session.is_authenticated else None

    def take_notice(self) -> Optional[str]:
        notice, self.notice = self.notice, None
        return notice
