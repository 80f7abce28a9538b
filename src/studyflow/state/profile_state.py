import logging
from typing import List

from studyflow.core.models import Subject, Task
from studyflow.services.firestore_service import FirestoreService
from studyflow.state.auth_provider import AuthProvider


logger = logging.getLogger(__name__)


class ProfileState:
    def __init__(self, data: FirestoreService, auth: AuthProvider) -> None:
        self.data = data
        self.auth = auth
        self.tasks: List[Task] = []
        self.subjects: List[Subject] = []
        self.loading = True

    @property
    def user_id(self) -> str:
        return self.auth.session.uid or ""

    @property
    def completed_tasks(self) -> List[Task]:
        return [task for task in self.tasks if task.completed]

    @property
    def pending_tasks(self) -> List[Task]:
        return [task for task in self.tasks if not task.completed]

    def load(self) -> None:
        try:
            self.tasks, self.subjects = self.data.get_tasks_and_subjects(self.user_id)
        finally:
            self.loading = False

    def rename(self, display_name: str) -> None:
        self.auth.update_user_profile(display_name=display_name.strip())

    def delete_account(self) -> None:
        """Remove every owned document, then the identity account.

        The two steps are independent: if the account deletion fails (for
        instance CREDENTIAL_TOO_OLD_LOGIN_AGAIN) the documents are already gone.
        """
        uid = self.user_id
        self.data.delete_all_user_data(uid)
        self.auth.delete_account()
        logger.info("Account %s and its data removed", uid)
