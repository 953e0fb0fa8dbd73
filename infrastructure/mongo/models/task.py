from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from core.domain.models.task import Task, TaskPriority, TaskStatus, as_utc


class TaskDocument(BaseModel):
    """
    Documento de Tarea tal como se almacena en MongoDB.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    description: str = ""
    status: str
    priority: str
    created_at: datetime
    updated_at: datetime
    due_date: datetime | None = None

    def to_domain(self) -> Task:
        return Task(
            id=UUID(self.id),
            title=self.title,
            description=self.description,
            status=TaskStatus(self.status),
            priority=TaskPriority(self.priority),
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
            due_date=as_utc(self.due_date),
        )

    @classmethod
    def from_domain(cls, task: Task) -> "TaskDocument":
        return cls(
            id=str(task.id),
            title=task.title,
            description=task.description,
            status=task.status.value,
            priority=task.priority.value,
            created_at=task.created_at,
            updated_at=task.updated_at,
            due_date=task.due_date,
        )
