from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    firebase_api_key: str = os.getenv("FIREBASE_API_KEY", "")
    firebase_project_id: str = os.getenv("FIREBASE_PROJECT_ID", "")
    firebase_auth_endpoint: str = os.getenv(
        "FIREBASE_AUTH_ENDPOINT",
        "https://identitytoolkit.googleapis.com/v1",
    )
    auth_timeout_seconds: float = float(os.getenv("AUTH_TIMEOUT_SECONDS", "15"))

    subjects_collection: str = os.getenv("FIRESTORE_SUBJECTS_COLLECTION", "subjects")
    tasks_collection: str = os.getenv("FIRESTORE_TASKS_COLLECTION", "tasks")

    cors_allowed_origins: tuple[str, ...] = _split_csv(
        os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    )

    log_level: str = os.getenv("STUDYFLOW_LOG_LEVEL", "INFO")
    web_mode: bool = os.getenv("STUDYFLOW_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))


settings = Settings()
