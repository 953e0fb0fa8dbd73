from typing import Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.domain.models.task import Task, TaskPriority, TaskStatus, as_utc
from core.domain.ports.task_repository import TaskRepository
from infrastructure.sqlalchemy.model.models import TaskModel
from infrastructure.sqlalchemy.session.db import get_session, init_db


def _to_domain(model: TaskModel) -> Task:
    # SQLite no conserva la zona horaria: as_utc la vuelve a poner
    return Task(
        id=UUID(model.id),
        title=model.title,
        description=model.description or "",
        status=TaskStatus(model.status),
        priority=TaskPriority(model.priority),
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
        due_date=as_utc(model.due_date),
    )


def _find(session: Session, task_id: UUID) -> TaskModel | None:
    return session.scalars(select(TaskModel).where(TaskModel.id == str(task_id))).first()


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        self._session_factory = session_factory or get_session
        if session_factory is None:
            init_db()

    def save(self, task: Task) -> None:
        session = self._session_factory()
        try:
            model = _find(session, task.id)
            if model is None:
                # seq lo asigna la base de datos al insertar
                model = TaskModel(id=str(task.id))
                session.add(model)
            model.title = task.title
            model.description = task.description
            model.status = task.status.value
            model.priority = task.priority.value
            model.created_at = task.created_at
            model.updated_at = task.updated_at
            model.due_date = task.due_date
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get(self, task_id: UUID) -> Task | None:
        session = self._session_factory()
        try:
            model = _find(session, task_id)
            return _to_domain(model) if model is not None else None
        finally:
            session.close()

    def list(self) -> list[Task]:
        session = self._session_factory()
        try:
            stmt = select(TaskModel).order_by(TaskModel.seq)
            return [_to_domain(model) for model in session.scalars(stmt)]
        finally:
            session.close()

    def delete(self, task_id: UUID) -> None:
        session = self._session_factory()
        try:
            model = _find(session, task_id)
            if model is None:
                return
            session.delete(model)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
