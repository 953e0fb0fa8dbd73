from fastapi import Depends

from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.task_stats import TaskStatsUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import Settings, get_settings
from infrastructure.container import get_task_repository


def settings() -> Settings:
    return get_settings()


def task_repository() -> TaskRepository:
    return get_task_repository()


def create_task_use_case(
    repository: TaskRepository = Depends(task_repository),
) -> CreateTaskUseCase:
    return CreateTaskUseCase(repository)


def get_task_use_case(
    repository: TaskRepository = Depends(task_repository),
) -> GetTaskUseCase:
    return GetTaskUseCase(repository)


def list_tasks_use_case(
    repository: TaskRepository = Depends(task_repository),
    config: Settings = Depends(settings),
) -> ListTasksUseCase:
    return ListTasksUseCase(repository, max_limit=config.max_page_size)


def update_task_use_case(
    repository: TaskRepository = Depends(task_repository),
) -> UpdateTaskUseCase:
    return UpdateTaskUseCase(repository)


def delete_task_use_case(
    repository: TaskRepository = Depends(task_repository),
) -> DeleteTaskUseCase:
    return DeleteTaskUseCase(repository)


def task_stats_use_case(
    repository: TaskRepository = Depends(task_repository),
) -> TaskStatsUseCase:
    return TaskStatsUseCase(repository)
