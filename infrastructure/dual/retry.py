"""
Reintentos con backoff exponencial para el repositorio dual.

Solo se reintentan errores transitorios de conexión/timeout; los errores de
lógica se propagan en el primer intento.
"""

import logging
import time
from typing import Any, Callable

from peewee import InterfaceError as PeeweeInterfaceError
from peewee import OperationalError as PeeweeOperationalError
from pymongo.errors import AutoReconnect, ConnectionFailure, ServerSelectionTimeoutError
from sqlalchemy.exc import DisconnectionError
from sqlalchemy.exc import OperationalError as SqlAlchemyOperationalError

logger = logging.getLogger(__name__)

RETRYABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    ConnectionError,
    TimeoutError,
    OSError,
    PeeweeOperationalError,
    PeeweeInterfaceError,
    SqlAlchemyOperationalError,
    DisconnectionError,
    ConnectionFailure,
    ServerSelectionTimeoutError,
    AutoReconnect,
)


def retry_with_backoff(
    func: Callable[[], Any],
    max_retries: int = 2,
    base_delay: float = 0.5,
    retryable_exceptions: tuple[type[BaseException], ...] = RETRYABLE_EXCEPTIONS,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """
    Ejecuta `func()` hasta `max_retries + 1` veces.

    El delay entre intentos es `base_delay * 2 ** (intento - 1)`. Al agotar
    los reintentos se relanza la última excepción.
    """
    attempt = 0
    while True:
        try:
            return func()
        except retryable_exceptions as e:
            attempt += 1
            if attempt > max_retries:
                logger.error(f"❌ Agotados {max_retries} reintentos. Último error: {e}")
                raise
            delay = base_delay * (2 ** (attempt - 1))
            logger.warning(
                f"🔁 Retry {attempt}/{max_retries} tras error transitorio: {e}. "
                f"Esperando {delay:.2f}s..."
            )
            sleep(delay)
