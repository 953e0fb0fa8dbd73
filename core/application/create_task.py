import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import uuid4

from core.domain.models.task import (
    Task,
    TaskPriority,
    TaskStatus,
    as_utc,
    normalize_description,
    normalize_title,
    utc_now,
)
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateTaskCommand:
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None


class CreateTaskUseCase:
    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def execute(self, cmd: CreateTaskCommand) -> Task:
        now = as_utc(self._clock())
        task = Task(
            id=uuid4(),
            title=normalize_title(cmd.title),
            description=normalize_description(cmd.description),
            status=cmd.status,
            priority=cmd.priority,
            created_at=now,
            updated_at=now,
            due_date=as_utc(cmd.due_date),
        )
        self._repository.save(task)
        logger.info(f"🆕 Tarea {task.id} creada ({task.status.value}, {task.priority.value})")
        return task
