from uuid import uuid4

import pytest

from core.domain.models.task import Task, TaskStatus
from infrastructure.memory.task_repository import InMemoryTaskRepository


@pytest.fixture
def repo():
    return InMemoryTaskRepository()


def test_save_and_get_returns_equal_copy(repo):
    task = Task(id=uuid4(), title="Memoria")
    repo.save(task)

    loaded = repo.get(task.id)

    assert loaded == task
    assert loaded is not task


def test_mutating_returned_task_does_not_change_store(repo):
    task = Task(id=uuid4(), title="Original")
    repo.save(task)

    loaded = repo.get(task.id)
    loaded.title = "Cambiado"
    loaded.status = TaskStatus.DONE

    assert repo.get(task.id).title == "Original"
    assert repo.get(task.id).status is TaskStatus.TODO


def test_update_keeps_insertion_position(repo):
    first = Task(id=uuid4(), title="1")
    second = Task(id=uuid4(), title="2")
    repo.save(first)
    repo.save(second)

    first.title = "1b"
    repo.save(first)

    assert [t.title for t in repo.list()] == ["1b", "2"]


def test_delete_is_idempotent(repo):
    task = Task(id=uuid4(), title="Borrar")
    repo.save(task)

    repo.delete(task.id)
    repo.delete(task.id)

    assert repo.get(task.id) is None
    assert repo.list() == []


def test_clear(repo):
    repo.save(Task(id=uuid4(), title="a"))
    repo.clear()

    assert repo.list() == []
