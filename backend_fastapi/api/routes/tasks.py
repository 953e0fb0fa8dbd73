from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from backend_fastapi.api.deps import (
    create_task_use_case,
    delete_task_use_case,
    get_task_use_case,
    list_tasks_use_case,
    settings,
    task_stats_use_case,
    update_task_use_case,
)
from backend_fastapi.api.schemas import (
    TaskCreateRequest,
    TaskPageResponse,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdateRequest,
)
from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskCommand, DeleteTaskUseCase
from core.application.get_task import GetTaskCommand, GetTaskUseCase
from core.application.list_tasks import ListTasksCommand, ListTasksUseCase
from core.application.task_stats import TaskStatsUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.models.query import MAX_PAGE_SIZE
from core.domain.models.task import TaskPriority, TaskStatus
from infrastructure.config import Settings

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear una nueva tarea",
)
def create_task(
    body: TaskCreateRequest,
    use_case: CreateTaskUseCase = Depends(create_task_use_case),
) -> TaskResponse:
    """
    Crea una nueva tarea.

    - **title**: obligatorio, 1-200 caracteres.
    - **status**: `todo` (por defecto), `in_progress` o `done`.
    - **priority**: `low`, `medium` (por defecto) o `high`.
    - **dueDate**: fecha límite opcional (ISO 8601).
    """
    return TaskResponse.from_domain(use_case.execute(body.to_command()))


@router.get(
    "",
    response_model=TaskPageResponse,
    summary="Listar tareas con filtros y paginación",
)
def list_tasks(
    status_: TaskStatus | None = Query(None, alias="status"),
    priority: TaskPriority | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    use_case: ListTasksUseCase = Depends(list_tasks_use_case),
    config: Settings = Depends(settings),
) -> TaskPageResponse:
    """
    Lista las tareas en orden de creación. `limit` por defecto es
    `DEFAULT_PAGE_SIZE`.
    """
    result = use_case.execute(
        ListTasksCommand(
            status=status_,
            priority=priority,
            page=page,
            limit=limit or config.default_page_size,
        )
    )
    return TaskPageResponse.from_domain(result)


# Debe declararse antes de /{task_id}
@router.get(
    "/stats",
    response_model=TaskStatsResponse,
    summary="Estadísticas de las tareas",
)
def task_stats(
    use_case: TaskStatsUseCase = Depends(task_stats_use_case),
) -> TaskStatsResponse:
    """
    Conteos por estado y prioridad, tareas vencidas y tasa de finalización
    (`done / total`, entre 0 y 1).
    """
    return TaskStatsResponse.from_domain(use_case.execute())


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Obtener una tarea",
)
def get_task(
    task_id: UUID,
    use_case: GetTaskUseCase = Depends(get_task_use_case),
) -> TaskResponse:
    return TaskResponse.from_domain(use_case.execute(GetTaskCommand(id=task_id)))


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Editar una tarea existente",
)
def update_task(
    task_id: UUID,
    body: TaskUpdateRequest,
    use_case: UpdateTaskUseCase = Depends(update_task_use_case),
) -> TaskResponse:
    """
    Modifica una tarea. Los campos omitidos se conservan; `dueDate: null`
    elimina la fecha límite.
    """
    return TaskResponse.from_domain(use_case.execute(task_id, body.to_command()))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Eliminar una tarea",
)
def delete_task(
    task_id: UUID,
    use_case: DeleteTaskUseCase = Depends(delete_task_use_case),
) -> None:
    use_case.execute(DeleteTaskCommand(id=task_id))
