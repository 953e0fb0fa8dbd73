import threading
from dataclasses import replace
from uuid import UUID

from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


class InMemoryTaskRepository(TaskRepository):
    """
    Repositorio en memoria, ordenado por inserción.

    Guarda y devuelve copias: mutar una tarea obtenida no altera el estado
    almacenado hasta que se vuelve a llamar a `save`.
    """

    def __init__(self) -> None:
        self._data: dict[UUID, Task] = {}
        self._lock = threading.Lock()

    def list(self) -> list[Task]:
        with self._lock:
            return [replace(t) for t in self._data.values()]

    def save(self, task: Task) -> None:
        with self._lock:
            self._data[task.id] = replace(task)

    def get(self, task_id: UUID) -> Task | None:
        with self._lock:
            task = self._data.get(task_id)
            return replace(task) if task is not None else None

    def delete(self, task_id: UUID) -> None:
        with self._lock:
            self._data.pop(task_id, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
