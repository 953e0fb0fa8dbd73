import math
from dataclasses import dataclass, field

from core.domain.errors import InvalidTaskError
from core.domain.models.task import Task, TaskPriority, TaskStatus

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(slots=True)
class TaskFilter:
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def validate(self, max_limit: int = MAX_PAGE_SIZE) -> None:
        if self.page < 1:
            raise InvalidTaskError("page debe ser mayor o igual a 1")
        if not 1 <= self.limit <= max_limit:
            raise InvalidTaskError(f"limit debe estar entre 1 y {max_limit}")

    def matches(self, task: Task) -> bool:
        if self.status is not None and task.status is not self.status:
            return False
        if self.priority is not None and task.priority is not self.priority:
            return False
        return True

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True)
class TaskPage:
    items: list[Task]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


@dataclass(slots=True)
class TaskStats:
    total: int = 0
    by_status: dict[TaskStatus, int] = field(
        default_factory=lambda: {s: 0 for s in TaskStatus}
    )
    by_priority: dict[TaskPriority, int] = field(
        default_factory=lambda: {p: 0 for p in TaskPriority}
    )
    overdue: int = 0

    @property
    def completion_rate(self) -> float:
        if not self.total:
            return 0.0
        return round(self.by_status[TaskStatus.DONE] / self.total, 4)
