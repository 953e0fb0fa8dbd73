import unittest
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from peewee import SqliteDatabase

from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.domain.models.task import Task, TaskPriority, TaskStatus
from infrastructure.peewee.model.models import TaskModel
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository

T0 = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


class PeeweeTaskRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.db = SqliteDatabase(":memory:")
        self.repo = PeeweeTaskRepository(database=self.db)

    def tearDown(self) -> None:
        with self.db.bind_ctx([TaskModel]):
            self.db.drop_tables([TaskModel])
        self.db.close()

    def test_save_and_get(self) -> None:
        task = Task(
            id=uuid4(),
            title="Tarea Peewee",
            description="desc",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            created_at=T0,
            updated_at=T0,
            due_date=T0 + timedelta(days=7),
        )

        self.repo.save(task)
        loaded = self.repo.get(task.id)

        self.assertEqual(loaded, task)
        self.assertEqual(loaded.created_at.tzinfo, timezone.utc)

    def test_save_updates_existing_row(self) -> None:
        task = Task(id=uuid4(), title="Antes", created_at=T0, updated_at=T0)
        self.repo.save(task)

        task.title = "Después"
        task.due_date = None
        task.updated_at = T0 + timedelta(hours=1)
        self.repo.save(task)

        self.assertEqual(self.repo.get(task.id).title, "Después")
        self.assertEqual(len(self.repo.list()), 1)

    def test_list_keeps_insertion_order(self) -> None:
        later = Task(id=uuid4(), title="segunda", created_at=T0 + timedelta(seconds=1))
        earlier = Task(id=uuid4(), title="primera", created_at=T0)
        self.repo.save(later)
        self.repo.save(earlier)

        self.assertEqual([t.title for t in self.repo.list()], ["segunda", "primera"])

    def test_tasks_created_in_same_instant_list_in_creation_order(self) -> None:
        create = CreateTaskUseCase(self.repo, clock=lambda: T0)
        for i in range(8):
            create.execute(CreateTaskCommand(title=f"t{i}"))

        page = ListTasksUseCase(self.repo).execute()

        self.assertEqual([t.title for t in page.items], [f"t{i}" for i in range(8)])

    def test_instances_on_different_databases_are_isolated(self) -> None:
        other_db = SqliteDatabase(":memory:")
        other = PeeweeTaskRepository(database=other_db)
        task = Task(id=uuid4(), title="Solo en la primera")

        self.repo.save(task)

        self.assertIsNone(other.get(task.id))
        self.assertEqual(other.list(), [])
        self.assertEqual(self.repo.get(task.id).title, "Solo en la primera")
        other_db.close()

    def test_delete(self) -> None:
        task = Task(id=uuid4(), title="Eliminar Peewee")
        self.repo.save(task)

        self.repo.delete(task.id)

        self.assertIsNone(self.repo.get(task.id))

    def test_get_missing_returns_none(self) -> None:
        self.assertIsNone(self.repo.get(uuid4()))


if __name__ == "__main__":
    unittest.main()
