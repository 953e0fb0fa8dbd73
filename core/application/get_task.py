from dataclasses import dataclass
from uuid import UUID

from core.domain.errors import TaskNotFoundError
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class GetTaskCommand:
    id: UUID


class GetTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: GetTaskCommand) -> Task:
        task = self._repository.get(cmd.id)
        if task is None:
            raise TaskNotFoundError(cmd.id)
        return task
