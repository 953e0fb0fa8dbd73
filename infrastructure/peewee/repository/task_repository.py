from datetime import datetime
from uuid import UUID

from peewee import Database

from core.domain.models.task import Task, TaskPriority, TaskStatus, as_utc
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.model.models import TaskModel
from infrastructure.peewee.session.db import db as default_db


def _naive_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return as_utc(value).replace(tzinfo=None)


def _to_domain(row: TaskModel) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        description=row.description or "",
        status=TaskStatus(row.status),
        priority=TaskPriority(row.priority),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        due_date=as_utc(row.due_date),
    )


class PeeweeTaskRepository(TaskRepository):
    """
    Repositorio peewee. Cada operación enlaza TaskModel a la base de datos
    de esta instancia con `bind_ctx`, así varias instancias sobre bases
    distintas no se pisan.
    """

    def __init__(self, database: Database | None = None) -> None:
        self._db = database if database is not None else default_db
        # Sin migraciones: la tabla se crea al iniciar si no existe
        self._db.connect(reuse_if_open=True)
        with self._bound():
            self._db.create_tables([TaskModel], safe=True)

    def _bound(self):
        return self._db.bind_ctx([TaskModel])

    def save(self, task: Task) -> None:
        fields = {
            TaskModel.title: task.title,
            TaskModel.description: task.description,
            TaskModel.status: task.status.value,
            TaskModel.priority: task.priority.value,
            TaskModel.created_at: _naive_utc(task.created_at),
            TaskModel.updated_at: _naive_utc(task.updated_at),
            TaskModel.due_date: _naive_utc(task.due_date),
        }
        with self._bound(), self._db.atomic():
            updated = (
                TaskModel.update(fields).where(TaskModel.id == task.id).execute()
            )
            if not updated:
                # seq lo asigna la base de datos
                TaskModel.insert({TaskModel.id: task.id, **fields}).execute()

    def get(self, task_id: UUID) -> Task | None:
        with self._bound():
            row = TaskModel.get_or_none(TaskModel.id == task_id)
        return _to_domain(row) if row is not None else None

    def list(self) -> list[Task]:
        with self._bound():
            return [_to_domain(row) for row in TaskModel.select().order_by(TaskModel.seq)]

    def delete(self, task_id: UUID) -> None:
        with self._bound():
            TaskModel.delete().where(TaskModel.id == task_id).execute()
