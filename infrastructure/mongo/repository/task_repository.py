from typing import Any
from uuid import UUID

from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection

from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository
from infrastructure.mongo.models.task import TaskDocument
from infrastructure.mongo.session.client import get_db

_SEQ_COUNTER_ID = "tasks"


class MongoTaskRepository(TaskRepository):
    """
    Implementación de TaskRepository usando MongoDB (síncrono).

    El orden de inserción se guarda en el campo `seq`, tomado de un contador
    atómico en la colección `counters`.
    """

    def __init__(
        self,
        collection: Collection[Any] | None = None,
        counters: Collection[Any] | None = None,
    ) -> None:
        self.collection: Collection[Any] = (
            collection if collection is not None else get_db().tasks
        )
        self.counters: Collection[Any] = (
            counters if counters is not None else get_db().counters
        )

    def _next_seq(self) -> int:
        counter = self.counters.find_one_and_update(
            {"_id": _SEQ_COUNTER_ID},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter["seq"]

    def save(self, task: Task) -> None:
        """
        Actualiza la tarea por `_id`; si no existe la inserta con un `seq` nuevo.
        """
        doc = TaskDocument.from_domain(task).model_dump(by_alias=True)
        result = self.collection.update_one({"_id": doc["_id"]}, {"$set": doc})
        if result.matched_count == 0:
            self.collection.insert_one({**doc, "seq": self._next_seq()})

    def get(self, task_id: UUID) -> Task | None:
        doc = self.collection.find_one({"_id": str(task_id)})
        if not doc:
            return None
        return TaskDocument(**doc).to_domain()

    def list(self) -> list[Task]:
        """
        Lista todas las tareas en orden de inserción.
        """
        docs = self.collection.find().sort([("seq", ASCENDING)])
        return [TaskDocument(**doc).to_domain() for doc in docs]

    def delete(self, task_id: UUID) -> None:
        self.collection.delete_one({"_id": str(task_id)})
