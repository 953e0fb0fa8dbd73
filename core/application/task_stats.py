from datetime import datetime
from typing import Callable

from core.domain.models.query import TaskStats
from core.domain.models.task import utc_now
from core.domain.ports.task_repository import TaskRepository


class TaskStatsUseCase:
    """
    Agrega conteos por estado y prioridad, tareas vencidas y tasa de
    finalización sobre todo el repositorio.
    """

    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def execute(self) -> TaskStats:
        now = self._clock()
        stats = TaskStats()
        for task in self._repository.list():
            stats.total += 1
            stats.by_status[task.status] += 1
            stats.by_priority[task.priority] += 1
            if task.is_overdue(now):
                stats.overdue += 1
        return stats
