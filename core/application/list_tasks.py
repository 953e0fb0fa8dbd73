from dataclasses import dataclass

from core.domain.models.query import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, TaskFilter, TaskPage
from core.domain.models.task import TaskPriority, TaskStatus
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class ListTasksCommand:
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


class ListTasksUseCase:
    def __init__(self, repository: TaskRepository, max_limit: int = MAX_PAGE_SIZE) -> None:
        self._repository = repository
        self._max_limit = max_limit

    def execute(self, cmd: ListTasksCommand | None = None) -> TaskPage:
        cmd = cmd or ListTasksCommand()
        criteria = TaskFilter(
            status=cmd.status,
            priority=cmd.priority,
            page=cmd.page,
            limit=cmd.limit,
        )
        criteria.validate(self._max_limit)

        matching = [t for t in self._repository.list() if criteria.matches(t)]
        start = criteria.offset
        return TaskPage(
            items=matching[start : start + criteria.limit],
            total=len(matching),
            page=criteria.page,
            limit=criteria.limit,
        )
