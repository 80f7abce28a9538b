from datetime import datetime
from typing import Dict, List, Literal, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from studyflow.config.settings import settings
from studyflow.core.models import SUBJECT_COLORS, Subject, Task
from studyflow.logging_setup import setup_logging
from studyflow.services.auth_service import AuthServiceError, FirebaseAuthService
from studyflow.services.firestore_service import FirestoreService, FirestoreServiceError


setup_logging(settings.log_level)

app = FastAPI(title="StudyFlow API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Priority = Literal["low", "medium", "high"]


class LoginPayload(BaseModel):
    email: str
    password: str


class RegisterPayload(LoginPayload):
    display_name: str = Field(min_length=1)


class SubjectPayload(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    color: str = "blue"
    teacher: Optional[str] = None


class SubjectUpdatePayload(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None
    teacher: Optional[str] = None


class TaskPayload(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    subject_id: str = ""
    subject: str = ""
    due_date: datetime
    priority: Priority = "medium"


class TaskUpdatePayload(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    subject_id: Optional[str] = None
    subject: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    completed: Optional[bool] = None


class TaskCompletionPayload(BaseModel):
    completed: bool


_TASK_FIELDS = {
    "title": "title",
    "description": "description",
    "subject_id": "subjectId",
    "subject": "subject",
    "due_date": "dueDate",
    "priority": "priority",
    "completed": "completed",
}


def get_store() -> FirestoreService:
    return FirestoreService.from_settings()


def get_auth() -> FirebaseAuthService:
    return FirebaseAuthService.from_settings()


def _required_uid(x_user_id: Optional[str]) -> str:
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing x-user-id header")
    return x_user_id


def _check_color(color: Optional[str]) -> None:
    if color is not None and color not in SUBJECT_COLORS:
        raise HTTPException(status_code=422, detail=f"Unknown color: {color}")


def _subject_out(subject: Subject) -> Dict:
    return {"id": subject.id, **subject.to_doc(), "createdAt": subject.created_at, "updatedAt": subject.updated_at}


def _task_out(task: Task) -> Dict:
    return {"id": task.id, **task.to_doc(), "createdAt": task.created_at, "updatedAt": task.updated_at}


def _owned(records, record_id: str):
    for record in records:
        if record.id == record_id:
            return record
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/auth/login")
def login(payload: LoginPayload, auth: FirebaseAuthService = Depends(get_auth)) -> Dict:
    try:
        result = auth.sign_in(payload.email, payload.password)
    except AuthServiceError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return {
        "uid": result.uid,
        "email": result.email,
        "display_name": result.display_name,
        "id_token": result.id_token,
        "refresh_token": result.refresh_token,
    }


@app.post("/auth/register")
def register(payload: RegisterPayload, auth: FirebaseAuthService = Depends(get_auth)) -> Dict:
    try:
        result = auth.sign_up(payload.email, payload.password, display_name=payload.display_name)
    except AuthServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return {
        "uid": result.uid,
        "email": result.email,
        "display_name": result.display_name,
        "id_token": result.id_token,
        "refresh_token": result.refresh_token,
    }


@app.get("/subjects")
def list_subjects(
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> List[Dict]:
    uid = _required_uid(x_user_id)
    try:
        return [_subject_out(subject) for subject in store.get_subjects(uid)]
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.post("/subjects")
def create_subject(
    payload: SubjectPayload,
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, str]:
    uid = _required_uid(x_user_id)
    _check_color(payload.color)
    try:
        subject_id = store.add_subject(
            Subject(
                name=payload.name,
                description=payload.description,
                color=payload.color,
                teacher=payload.teacher,
                user_id=uid,
            )
        )
        return {"id": subject_id}
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.patch("/subjects/{subject_id}")
def update_subject(
    subject_id: str,
    payload: SubjectUpdatePayload,
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, str]:
    uid = _required_uid(x_user_id)
    _check_color(payload.color)
    try:
        _owned(store.get_subjects(uid), subject_id)
        store.update_subject(subject_id, payload.model_dump(exclude_unset=True, exclude_none=True))
        return {"status": "updated"}
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.delete("/subjects/{subject_id}")
def delete_subject(
    subject_id: str,
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, str]:
    uid = _required_uid(x_user_id)
    try:
        _owned(store.get_subjects(uid), subject_id)
        store.delete_subject(subject_id)
        return {"status": "deleted"}
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.get("/tasks")
def list_tasks(
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> List[Dict]:
    uid = _required_uid(x_user_id)
    try:
        return [_task_out(task) for task in store.get_tasks(uid)]
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.post("/tasks")
def create_task(
    payload: TaskPayload,
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, str]:
    uid = _required_uid(x_user_id)
    try:
        task_id = store.add_task(
            Task(
                title=payload.title,
                description=payload.description,
                subject=payload.subject,
                subject_id=payload.subject_id,
                due_date=payload.due_date,
                priority=payload.priority,
                completed=False,
                user_id=uid,
            )
        )
        return {"id": task_id}
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.patch("/tasks/{task_id}")
def update_task(
    task_id: str,
    payload: TaskUpdatePayload,
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, str]:
    uid = _required_uid(x_user_id)
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    updates = {_TASK_FIELDS[key]: value for key, value in fields.items()}
    try:
        _owned(store.get_tasks(uid), task_id)
        if "subjectId" in updates and "subject" not in updates:
            names = {subject.id: subject.name for subject in store.get_subjects(uid)}
            updates["subject"] = names.get(updates["subjectId"], "")
        store.update_task(task_id, updates)
        return {"status": "updated"}
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.patch("/tasks/{task_id}/completed")
def set_task_completed(
    task_id: str,
    payload: TaskCompletionPayload,
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, str]:
    uid = _required_uid(x_user_id)
    try:
        _owned(store.get_tasks(uid), task_id)
        store.set_task_completed(task_id, payload.completed)
        return {"status": "updated"}
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.delete("/tasks/{task_id}")
def delete_task(
    task_id: str,
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, str]:
    uid = _required_uid(x_user_id)
    try:
        _owned(store.get_tasks(uid), task_id)
        store.delete_task(task_id)
        return {"status": "deleted"}
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.get("/stats")
def get_stats(
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, int]:
    uid = _required_uid(x_user_id)
    try:
        return store.get_user_stats(uid).as_dict()
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.delete("/account/data")
def delete_account_data(
    x_user_id: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> Dict[str, str]:
    uid = _required_uid(x_user_id)
    try:
        store.delete_all_user_data(uid)
        return {"status": "deleted"}
    except FirestoreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
