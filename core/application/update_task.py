import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable
from uuid import UUID

from core.domain.errors import TaskNotFoundError
from core.domain.models.task import (
    Task,
    as_utc,
    normalize_description,
    normalize_title,
    utc_now,
)
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Distingue "campo no enviado" de "campo enviado como null".
UNSET: Any = _Unset()


@dataclass(slots=True)
class UpdateTaskCommand:
    title: Any = UNSET
    description: Any = UNSET
    status: Any = UNSET
    priority: Any = UNSET
    due_date: Any = UNSET

    def provided(self) -> dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in self.__slots__
            if getattr(self, name) is not UNSET
        }


class UpdateTaskUseCase:
    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def execute(self, task_id: UUID, cmd: UpdateTaskCommand) -> Task:
        task = self._repository.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        changes = cmd.provided()
        if "title" in changes:
            task.title = normalize_title(changes["title"])
        if "description" in changes:
            task.description = normalize_description(changes["description"])
        if changes.get("status") is not None:
            task.status = changes["status"]
        if changes.get("priority") is not None:
            task.priority = changes["priority"]
        if "due_date" in changes:
            task.due_date = as_utc(changes["due_date"])

        task.touch(self._clock())
        self._repository.save(task)
        logger.info(f"✏️ Tarea {task_id} actualizada (campos: {sorted(changes)})")
        return task
