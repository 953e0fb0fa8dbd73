import logging
from functools import lru_cache

from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import get_settings

logger = logging.getLogger(__name__)


def build_task_repository(storage: str) -> TaskRepository:
    # Imports diferidos: solo se conecta al almacenamiento elegido
    if storage == "peewee":
        from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository

        return PeeweeTaskRepository()
    if storage == "sqlalchemy":
        from infrastructure.sqlalchemy.repository.task_repository import (
            SqlAlchemyTaskRepository,
        )

        return SqlAlchemyTaskRepository()
    if storage == "mongo":
        from infrastructure.mongo.repository.task_repository import MongoTaskRepository

        return MongoTaskRepository()
    if storage == "dual":
        from infrastructure.dual.repository.task_repository import DualTaskRepository
        from infrastructure.mongo.repository.task_repository import MongoTaskRepository
        from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository

        return DualTaskRepository(
            sql_repository=PeeweeTaskRepository(),
            mongo_repository=MongoTaskRepository(),
        )

    from infrastructure.memory.task_repository import InMemoryTaskRepository

    return InMemoryTaskRepository()


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    """Repositorio único por proceso (el de memoria perdería datos si no)."""
    storage = get_settings().storage
    logger.info(f"📦 Almacenamiento de tareas: {storage}")
    return build_task_repository(storage)
