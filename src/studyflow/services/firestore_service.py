from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Optional, Tuple

try:
    from google.api_core.exceptions import GoogleAPICallError
    from google.cloud import firestore
    from google.cloud.firestore_v1.base_query import FieldFilter
except ModuleNotFoundError as exc:
    raise ModuleNotFoundError(
        "Missing dependency 'google-cloud-firestore'. Install the project with pip install -e ."
    ) from exc

from studyflow.config.settings import settings
from studyflow.core.models import Subject, Task, UserStats
from studyflow.core.stats import compute_user_stats


logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class FirestoreServiceError(Exception):
    pass


def _created_key(record) -> datetime:
    value = record.created_at
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class FirestoreService:
    """Owner-scoped CRUD over the ``subjects`` and ``tasks`` collections.

    Reads filter on ``userId`` and sort by ``createdAt`` descending in Python.
    Nothing here is transactional.
    """

    def __init__(
        self,
        project_id: str,
        client=None,
        subjects_collection: str = "subjects",
        tasks_collection: str = "tasks",
    ) -> None:
        if client is None:
            if not project_id:
                raise FirestoreServiceError("Missing FIREBASE_PROJECT_ID in environment")
            client = firestore.Client(project=project_id)
        self.db = client
        self.subjects_collection = subjects_collection
        self.tasks_collection = tasks_collection

    @classmethod
    def from_settings(cls) -> "FirestoreService":
        return cls(
            settings.firebase_project_id,
            subjects_collection=settings.subjects_collection,
            tasks_collection=settings.tasks_collection,
        )

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _owned_docs(self, collection: str, user_id: str) -> List[Any]:
        try:
            query = self.db.collection(collection).where(filter=FieldFilter("userId", "==", user_id))
            return list(query.stream())
        except GoogleAPICallError as exc:
            raise FirestoreServiceError(str(exc)) from exc

    def _add(self, collection: str, data: Dict[str, Any]) -> str:
        now = self._now()
        payload = {**data, "createdAt": now, "updatedAt": now}
        try:
            _, ref = self.db.collection(collection).add(payload)
        except GoogleAPICallError as exc:
            raise FirestoreServiceError(str(exc)) from exc
        return ref.id

    def _update(self, collection: str, doc_id: str, updates: Dict[str, Any]) -> None:
        try:
            self.db.collection(collection).document(doc_id).update({**updates, "updatedAt": self._now()})
        except GoogleAPICallError as exc:
            raise FirestoreServiceError(str(exc)) from exc

    def _delete(self, collection: str, doc_id: str) -> None:
        try:
            self.db.collection(collection).document(doc_id).delete()
        except GoogleAPICallError as exc:
            raise FirestoreServiceError(str(exc)) from exc

    # Subjects

    def get_subjects(self, user_id: str) -> List[Subject]:
        docs = self._owned_docs(self.subjects_collection, user_id)
        subjects = [Subject.from_doc(doc.id, doc.to_dict() or {}) for doc in docs]
        subjects.sort(key=_created_key, reverse=True)
        return subjects

    def add_subject(self, subject: Subject) -> str:
        subject_id = self._add(self.subjects_collection, subject.to_doc())
        logger.info("Created subject %s for %s", subject_id, subject.user_id)
        return subject_id

    def update_subject(self, subject_id: str, updates: Dict[str, Any]) -> None:
        self._update(self.subjects_collection, subject_id, updates)
        logger.info("Updated subject %s", subject_id)

    def delete_subject(self, subject_id: str) -> None:
        # Tasks pointing at this subject are left in place.
        self._delete(self.subjects_collection, subject_id)
        logger.info("Deleted subject %s", subject_id)

    # Tasks

    def get_tasks(self, user_id: str) -> List[Task]:
        docs = self._owned_docs(self.tasks_collection, user_id)
        tasks = [Task.from_doc(doc.id, doc.to_dict() or {}) for doc in docs]
        tasks.sort(key=_created_key, reverse=True)
        return tasks

    def add_task(self, task: Task) -> str:
        task_id = self._add(self.tasks_collection, task.to_doc())
        logger.info("Created task %s for %s", task_id, task.user_id)
        return task_id

    def update_task(self, task_id: str, updates: Dict[str, Any]) -> None:
        self._update(self.tasks_collection, task_id, updates)
        logger.info("Updated task %s", task_id)

    def set_task_completed(self, task_id: str, completed: bool) -> None:
        self.update_task(task_id, {"completed": completed})

    def delete_task(self, task_id: str) -> None:
        self._delete(self.tasks_collection, task_id)
        logger.info("Deleted task %s", task_id)

    # Aggregates

    def get_tasks_and_subjects(self, user_id: str) -> Tuple[List[Task], List[Subject]]:
        with ThreadPoolExecutor(max_workers=2) as pool:
            tasks_future = pool.submit(self.get_tasks, user_id)
            subjects_future = pool.submit(self.get_subjects, user_id)
            return tasks_future.result(), subjects_future.result()

    def get_user_stats(self, user_id: str, now: Optional[datetime] = None) -> UserStats:
        tasks = self.get_tasks(user_id)
        subjects = self.get_subjects(user_id)
        return compute_user_stats(tasks, subjects, now)

    def delete_all_user_data(self, user_id: str) -> None:
        try:
            self._delete_owned(self.tasks_collection, user_id)
            self._delete_owned(self.subjects_collection, user_id)
        except FirestoreServiceError:
            logger.exception("Error deleting data for %s", user_id)
            raise

    def _delete_owned(self, collection: str, user_id: str) -> None:
        docs = self._owned_docs(collection, user_id)
        if not docs:
            return

        def _delete_ref(doc) -> None:
            try:
                doc.reference.delete()
            except GoogleAPICallError as exc:
                raise FirestoreServiceError(str(exc)) from exc

        with ThreadPoolExecutor(max_workers=min(8, len(docs))) as pool:
            list(pool.map(_delete_ref, docs))
        logger.info("Deleted %d documents from %s for %s", len(docs), collection, user_id)
