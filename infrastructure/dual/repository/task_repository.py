import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, Callable
from uuid import UUID

import psycopg2
from pymongo import MongoClient

from core.domain.errors import StorageUnavailableError
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import get_settings
from infrastructure.dual.circuit_breaker import CircuitBreaker
from infrastructure.dual.retry import retry_with_backoff

logger = logging.getLogger(__name__)

# Pool compartido: 2 hilos para pings + 2 para escrituras en paralelo
executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="DualRepo")

_PING_TIMEOUT_SECS = 3
_CIRCUIT_FAILURE_THRESHOLD = 3
_CIRCUIT_RECOVERY_TIMEOUT = 30.0
_RETRY_MAX_RETRIES = 2
_RETRY_BASE_DELAY = 0.5
_PARALLEL_TIMEOUT = 10.0


def _ping_sql() -> bool:
    """SQLite siempre está disponible; Postgres se comprueba con psycopg2."""
    dsn = get_settings().database_url
    if not dsn.startswith("postgres"):
        return True
    try:
        conn = psycopg2.connect(dsn=dsn, connect_timeout=_PING_TIMEOUT_SECS)
        conn.close()
        return True
    except psycopg2.Error as e:
        logger.error(f"🔴 SQL no disponible: {e}")
        return False


def _ping_mongo() -> bool:
    try:
        client = MongoClient(
            get_settings().mongo_uri,
            serverSelectionTimeoutMS=_PING_TIMEOUT_SECS * 1000,
        )
        try:
            client.admin.command("ping")
        finally:
            client.close()
        return True
    except Exception as e:
        logger.error(f"🔴 Mongo no disponible: {e}")
        return False


def ping_both() -> tuple[bool, bool]:
    """
    Ping a SQL y MongoDB en paralelo; la latencia es la del más lento.

    Returns:
        Tupla (sql_ok, mongo_ok)
    """
    future_sql = executor.submit(_ping_sql)
    future_mongo = executor.submit(_ping_mongo)
    return (
        future_sql.result(timeout=_PING_TIMEOUT_SECS + 1),
        future_mongo.result(timeout=_PING_TIMEOUT_SECS + 1),
    )


class DualTaskRepository(TaskRepository):
    """
    Repositorio que escribe en un almacenamiento SQL y en MongoDB a la vez.

    - Escritura (save/delete): se consultan los Circuit Breakers y, si ambos
      permiten, se hace ping previo en paralelo. Se escribe en todo lo que
      responda; si nada responde se lanza StorageUnavailableError.
    - Lectura (get/list): SQL primero con retry, MongoDB como fallback. Un
      circuito SQL abierto salta directo a MongoDB.
    """

    def __init__(
        self,
        sql_repository: TaskRepository,
        mongo_repository: TaskRepository,
        pinger: Callable[[], tuple[bool, bool]] = ping_both,
        max_retries: int = _RETRY_MAX_RETRIES,
        base_delay: float = _RETRY_BASE_DELAY,
        parallel_timeout: float = _PARALLEL_TIMEOUT,
    ) -> None:
        self._sql_repo = sql_repository
        self._mongo_repo = mongo_repository
        self._pinger = pinger
        self._max_retries = max_retries
        self._base_delay = base_delay
        self._parallel_timeout = parallel_timeout

        self._sql_circuit = CircuitBreaker(
            name="SQL",
            failure_threshold=_CIRCUIT_FAILURE_THRESHOLD,
            recovery_timeout=_CIRCUIT_RECOVERY_TIMEOUT,
        )
        self._mongo_circuit = CircuitBreaker(
            name="MongoDB",
            failure_threshold=_CIRCUIT_FAILURE_THRESHOLD,
            recovery_timeout=_CIRCUIT_RECOVERY_TIMEOUT,
        )
        logger.info("DualTaskRepository inicializado (Circuit Breaker + Retry)")

    # ── Infraestructura ──────────────────────────────────────────────────────

    def _with_retry(self, func: Callable[[], Any]) -> Any:
        return retry_with_backoff(
            func, max_retries=self._max_retries, base_delay=self._base_delay
        )

    def _execute_parallel(
        self, sql_func: Callable[[], Any], mongo_func: Callable[[], Any]
    ) -> tuple[Any | None, Exception | None, Any | None, Exception | None]:
        """
        Ejecuta ambas operaciones en el pool con timeout explícito.

        Returns:
            Tupla (sql_result, sql_error, mongo_result, mongo_error)
        """
        futures = {
            executor.submit(sql_func): self._sql_circuit,
            executor.submit(mongo_func): self._mongo_circuit,
        }
        results: dict[CircuitBreaker, Any] = {}
        errors: dict[CircuitBreaker, Exception] = {}

        try:
            for future in as_completed(futures, timeout=self._parallel_timeout):
                circuit = futures[future]
                try:
                    results[circuit] = future.result()
                    circuit.record_success()
                except Exception as e:
                    errors[circuit] = e
                    circuit.record_failure()
                    logger.error(f"✗ {circuit.name} falló: {e}")
        except FuturesTimeoutError:
            for future, circuit in futures.items():
                if not future.done():
                    future.cancel()
                    errors[circuit] = TimeoutError(
                        f"{circuit.name} excedió timeout paralelo"
                    )
                    circuit.record_failure()
                    logger.error(f"⏰ {circuit.name} timeout ({self._parallel_timeout}s)")

        return (
            results.get(self._sql_circuit),
            errors.get(self._sql_circuit),
            results.get(self._mongo_circuit),
            errors.get(self._mongo_circuit),
        )

    def _execute_single(self, circuit: CircuitBreaker, func: Callable[[], Any]) -> None:
        try:
            self._with_retry(func)
        except Exception as e:
            circuit.record_failure()
            logger.error(f"✗ {circuit.name} (solo) falló: {e}")
            raise
        circuit.record_success()

    def _dispatch_write(
        self,
        operation: str,
        sql_func: Callable[[], Any],
        mongo_func: Callable[[], Any],
        entity_id: UUID,
    ) -> None:
        sql_allowed = self._sql_circuit.allow_request()
        mongo_allowed = self._mongo_circuit.allow_request()

        if sql_allowed and mongo_allowed:
            logger.debug(f"🏓 Ping previo para {operation} de {entity_id}")
            sql_allowed, mongo_allowed = self._pinger()
            if not sql_allowed:
                self._sql_circuit.record_failure()
            if not mongo_allowed:
                self._mongo_circuit.record_failure()

        if not sql_allowed and not mongo_allowed:
            msg = f"{operation} abortado: ningún almacenamiento disponible"
            logger.error(f"❌ {msg}")
            raise StorageUnavailableError(msg)

        if not mongo_allowed:
            logger.warning(f"⚠️ MongoDB no disponible: {operation} de {entity_id} solo en SQL")
            self._execute_single(self._sql_circuit, sql_func)
            return

        if not sql_allowed:
            logger.warning(f"⚠️ SQL no disponible: {operation} de {entity_id} solo en MongoDB")
            self._execute_single(self._mongo_circuit, mongo_func)
            return

        _, sql_error, _, mongo_error = self._execute_parallel(sql_func, mongo_func)
        if sql_error and mongo_error:
            msg = (
                f"{operation} falló en ambas bases de datos. "
                f"SQL: {sql_error}. MongoDB: {mongo_error}"
            )
            logger.error(f"❌ {msg}")
            raise StorageUnavailableError(msg)
        if sql_error or mongo_error:
            logger.warning(f"⚠️ {operation} de {entity_id} aplicado en un solo almacenamiento")
        else:
            logger.debug(f"✅ {operation} dual exitoso para {entity_id}")

    def _read(
        self,
        operation: str,
        sql_func: Callable[[], Any],
        mongo_func: Callable[[], Any],
        accept: Callable[[Any], bool],
    ) -> tuple[bool, Any]:
        """
        Lee de SQL y, si falla o `accept` rechaza el resultado, de MongoDB.

        Returns:
            Tupla (algún almacenamiento respondió, resultado)
        """
        answered = False
        result = None
        for circuit, func in (
            (self._sql_circuit, sql_func),
            (self._mongo_circuit, mongo_func),
        ):
            if not circuit.allow_request():
                logger.info(f"⚡ {circuit.name} circuit OPEN, se salta en {operation}")
                continue
            try:
                result = self._with_retry(func)
            except Exception as e:
                circuit.record_failure()
                logger.warning(f"⚠️ Error en {operation} desde {circuit.name}: {e}")
                continue
            circuit.record_success()
            answered = True
            if accept(result):
                return True, result
        return answered, result

    # ── Interfaz pública ─────────────────────────────────────────────────────

    def save(self, task: Task) -> None:
        self._dispatch_write(
            "save",
            lambda: self._sql_repo.save(task),
            lambda: self._mongo_repo.save(task),
            task.id,
        )

    def delete(self, task_id: UUID) -> None:
        self._dispatch_write(
            "delete",
            lambda: self._sql_repo.delete(task_id),
            lambda: self._mongo_repo.delete(task_id),
            task_id,
        )

    def get(self, task_id: UUID) -> Task | None:
        _, task = self._read(
            f"get({task_id})",
            lambda: self._sql_repo.get(task_id),
            lambda: self._mongo_repo.get(task_id),
            accept=lambda found: found is not None,
        )
        return task

    def list(self) -> list[Task]:
        answered, tasks = self._read(
            "list",
            self._sql_repo.list,
            self._mongo_repo.list,
            accept=lambda _: True,
        )
        if not answered:
            raise StorageUnavailableError(
                "Falló el listado: ningún almacenamiento disponible"
            )
        return tasks
