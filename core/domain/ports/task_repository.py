from abc import ABC, abstractmethod
from uuid import UUID

from core.domain.models.task import Task


class TaskRepository(ABC):
    @abstractmethod
    def list(self) -> list[Task]:
        """Todas las tareas en orden de creación."""
        raise NotImplementedError

    @abstractmethod
    def save(self, task: Task) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, task_id: UUID) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, task_id: UUID) -> None:
        raise NotImplementedError
