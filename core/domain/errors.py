from uuid import UUID


class DomainError(Exception):
    """Error base del dominio de tareas."""


class TaskNotFoundError(DomainError):
    def __init__(self, task_id: UUID) -> None:
        super().__init__(f"Tarea con id {task_id} no encontrada")
        self.task_id = task_id


class InvalidTaskError(DomainError, ValueError):
    """Una regla del dominio no se cumple (título vacío, página inválida...)."""


class StorageUnavailableError(DomainError):
    """Ningún almacenamiento pudo atender la operación."""
