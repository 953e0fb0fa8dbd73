from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StringConstraints, model_validator
from pydantic.alias_generators import to_camel

from core.application.create_task import CreateTaskCommand
from core.application.update_task import UpdateTaskCommand
from core.domain.models.query import TaskPage, TaskStats
from core.domain.models.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Task,
    TaskPriority,
    TaskStatus,
)


class CamelModel(BaseModel):
    # JSON en camelCase; también se aceptan los nombres snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    model_config = ConfigDict(extra="forbid")


Title = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH)
]
Description = Annotated[str, StringConstraints(max_length=DESCRIPTION_MAX_LENGTH)]


class TaskCreateRequest(RequestModel):
    title: Title
    description: Description | None = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None

    def to_command(self) -> CreateTaskCommand:
        return CreateTaskCommand(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            due_date=self.due_date,
        )


class TaskUpdateRequest(RequestModel):
    """Actualización parcial: solo se aplican los campos enviados."""

    title: Title | None = None
    description: Description | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    @model_validator(mode="after")
    def _reject_required_nulls(self) -> "TaskUpdateRequest":
        for name in ("title", "status", "priority"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} no puede ser null")
        return self

    def to_command(self) -> UpdateTaskCommand:
        cmd = UpdateTaskCommand()
        for name in self.model_fields_set:
            setattr(cmd, name, getattr(self, name))
        return cmd


class TaskResponse(CamelModel):
    id: UUID
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime
    due_date: datetime | None = None

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            created_at=task.created_at,
            updated_at=task.updated_at,
            due_date=task.due_date,
        )


class TaskPageResponse(CamelModel):
    items: list[TaskResponse]
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def from_domain(cls, page: TaskPage) -> "TaskPageResponse":
        return cls(
            items=[TaskResponse.from_domain(t) for t in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            pages=page.pages,
        )


class TaskStatsResponse(CamelModel):
    total: int
    by_status: dict[str, int]
    by_priority: dict[str, int]
    completion_rate: float
    overdue: int

    @classmethod
    def from_domain(cls, stats: TaskStats) -> "TaskStatsResponse":
        return cls(
            total=stats.total,
            by_status={s.value: n for s, n in stats.by_status.items()},
            by_priority={p.value: n for p, n in stats.by_priority.items()},
            completion_rate=stats.completion_rate,
            overdue=stats.overdue,
        )


class HealthResponse(BaseModel):
    status: str = "ok"
    storage: str
