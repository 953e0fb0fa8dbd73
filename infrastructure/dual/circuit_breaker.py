"""
Circuit Breaker por almacenamiento para el repositorio dual.

Estados:
    CLOSED    → operación normal; cuenta fallos consecutivos.
    OPEN      → almacenamiento considerado caído; las llamadas se saltan.
    HALF_OPEN → pasado `recovery_timeout`, se deja pasar una llamada de prueba.
"""

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)


class CircuitBreaker:
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"

    def __init__(
        self,
        name: str = "default",
        failure_threshold: int = 3,
        recovery_timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self._clock = clock

        self._state = self.CLOSED
        self._failure_count = 0
        self._opened_at: float | None = None
        self._lock = threading.Lock()

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def state(self) -> str:
        with self._lock:
            if self._state == self.OPEN and self._opened_at is not None:
                elapsed = self._clock() - self._opened_at
                if elapsed >= self.recovery_timeout:
                    self._state = self.HALF_OPEN
                    logger.info(
                        f"🔄 Circuit Breaker [{self.name}]: OPEN → HALF_OPEN ({elapsed:.1f}s)"
                    )
            return self._state

    def allow_request(self) -> bool:
        return self.state != self.OPEN

    def record_success(self) -> None:
        with self._lock:
            if self._state != self.CLOSED:
                logger.info(f"✅ Circuit Breaker [{self.name}]: {self._state} → CLOSED")
            self._state = self.CLOSED
            self._failure_count = 0
            self._opened_at = None

    def record_failure(self) -> None:
        with self._lock:
            self._failure_count += 1
            if self._state == self.HALF_OPEN or (
                self._state == self.CLOSED
                and self._failure_count >= self.failure_threshold
            ):
                logger.warning(
                    f"🔴 Circuit Breaker [{self.name}]: {self._state} → OPEN "
                    f"(fallos consecutivos: {self._failure_count})"
                )
                self._state = self.OPEN
            if self._state == self.OPEN:
                self._opened_at = self._clock()

    def reset(self) -> None:
        with self._lock:
            self._state = self.CLOSED
            self._failure_count = 0
            self._opened_at = None
