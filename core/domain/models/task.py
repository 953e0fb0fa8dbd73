from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from core.domain.errors import InvalidTaskError

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000


class TaskStatus(Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Normaliza a UTC con zona. Un datetime naive se interpreta como UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_title(title: str) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise InvalidTaskError("El título de la tarea no puede estar vacío")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise InvalidTaskError(
            f"El título no puede superar {TITLE_MAX_LENGTH} caracteres"
        )
    return cleaned


def normalize_description(description: str | None) -> str:
    text = description or ""
    if len(text) > DESCRIPTION_MAX_LENGTH:
        raise InvalidTaskError(
            f"La descripción no puede superar {DESCRIPTION_MAX_LENGTH} caracteres"
        )
    return text


@dataclass(slots=True)
class Task:
    id: UUID
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    due_date: datetime | None = None

    def touch(self, now: datetime) -> None:
        # updated_at nunca queda por detrás de created_at
        self.updated_at = max(as_utc(now), self.created_at)

    def is_overdue(self, now: datetime) -> bool:
        if self.due_date is None or self.status is TaskStatus.DONE:
            return False
        return self.due_date < as_utc(now)
