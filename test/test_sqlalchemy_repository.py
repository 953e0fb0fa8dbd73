import unittest
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.domain.models.task import Task, TaskPriority, TaskStatus
from infrastructure.sqlalchemy.repository.task_repository import SqlAlchemyTaskRepository
from infrastructure.sqlalchemy.session.db import Base, init_db

T0 = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


class SqlAlchemyTaskRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        init_db(bind=self.engine)
        self.repo = SqlAlchemyTaskRepository(
            session_factory=sessionmaker(bind=self.engine, expire_on_commit=False)
        )

    def tearDown(self) -> None:
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    def test_save_and_get(self) -> None:
        task = Task(
            id=uuid4(),
            title="Tarea SQL",
            description="desc",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.LOW,
            created_at=T0,
            updated_at=T0,
            due_date=T0 + timedelta(days=1),
        )

        self.repo.save(task)
        loaded = self.repo.get(task.id)

        self.assertIsNotNone(loaded)
        self.assertEqual(loaded, task)

    def test_save_updates_existing_row(self) -> None:
        task = Task(id=uuid4(), title="v1", created_at=T0, updated_at=T0)
        self.repo.save(task)

        task.status = TaskStatus.DONE
        self.repo.save(task)

        tasks = self.repo.list()
        self.assertEqual(len(tasks), 1)
        self.assertEqual(tasks[0].status, TaskStatus.DONE)

    def test_delete(self) -> None:
        task = Task(id=uuid4(), title="Eliminar SQL")
        self.repo.save(task)

        self.repo.delete(task.id)
        self.repo.delete(task.id)

        self.assertIsNone(self.repo.get(task.id))

    def test_tasks_created_in_same_instant_list_in_creation_order(self) -> None:
        create = CreateTaskUseCase(self.repo, clock=lambda: T0)
        for i in range(8):
            create.execute(CreateTaskCommand(title=f"t{i}"))

        page = ListTasksUseCase(self.repo).execute()

        self.assertEqual([t.title for t in page.items], [f"t{i}" for i in range(8)])

    def test_update_keeps_list_position(self) -> None:
        first = Task(id=uuid4(), title="primera", created_at=T0, updated_at=T0)
        second = Task(id=uuid4(), title="segunda", created_at=T0, updated_at=T0)
        self.repo.save(first)
        self.repo.save(second)

        first.title = "primera editada"
        self.repo.save(first)

        self.assertEqual(
            [t.title for t in self.repo.list()], ["primera editada", "segunda"]
        )


if __name__ == "__main__":
    unittest.main()
