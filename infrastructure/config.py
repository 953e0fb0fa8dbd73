"""
Configuración centralizada leída de variables de entorno (y de `.env`).

Un único objeto `Settings` para toda la app; `get_settings()` lo cachea.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from core.domain.models.query import MAX_PAGE_SIZE

STORAGE_BACKENDS = ("memory", "peewee", "sqlalchemy", "mongo", "dual")


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _as_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} debe ser un entero, recibido {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} debe ser >= {minimum}, recibido {value}")
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False
    log_level: str = "info"
    storage: str = "memory"
    database_url: str = "sqlite:///tasks.db"
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "task_tracker"
    cors_origins: tuple[str, ...] = ("*",)
    cors_allow_credentials: bool = True
    cors_allow_methods: tuple[str, ...] = ("*",)
    cors_allow_headers: tuple[str, ...] = ("*",)
    default_page_size: int = 20
    max_page_size: int = MAX_PAGE_SIZE


def load_settings() -> Settings:
    """
    Construye `Settings` a partir del entorno.

    Raises:
        ValueError: Si algún valor no es válido (puerto, backend, tamaños de página).
    """
    load_dotenv(override=False)

    # ORM se mantiene por compatibilidad con despliegues anteriores
    storage = (os.getenv("TASKS_STORAGE") or os.getenv("ORM") or "memory").strip().lower()
    if storage not in STORAGE_BACKENDS:
        raise ValueError(
            f"TASKS_STORAGE debe ser uno de {', '.join(STORAGE_BACKENDS)}, recibido {storage!r}"
        )

    default_page_size = _as_int("DEFAULT_PAGE_SIZE", 20)
    max_page_size = _as_int("MAX_PAGE_SIZE", MAX_PAGE_SIZE)
    if max_page_size > MAX_PAGE_SIZE:
        raise ValueError(
            f"MAX_PAGE_SIZE no puede superar {MAX_PAGE_SIZE}, recibido {max_page_size}"
        )
    if default_page_size > max_page_size:
        raise ValueError("DEFAULT_PAGE_SIZE no puede superar MAX_PAGE_SIZE")

    return Settings(
        host=os.getenv("HOST", "127.0.0.1"),
        port=_as_int("PORT", 8000),
        reload=_as_bool(os.getenv("RELOAD", "false")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
        storage=storage,
        database_url=os.getenv("DATABASE_URL", "sqlite:///tasks.db"),
        mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
        mongo_db_name=os.getenv("MONGO_DB_NAME", "task_tracker"),
        cors_origins=tuple(_as_list(os.getenv("CORS_ORIGINS", "*"))),
        cors_allow_credentials=_as_bool(os.getenv("CORS_ALLOW_CREDENTIALS", "true")),
        cors_allow_methods=tuple(_as_list(os.getenv("CORS_ALLOW_METHODS", "*"))),
        cors_allow_headers=tuple(_as_list(os.getenv("CORS_ALLOW_HEADERS", "*"))),
        default_page_size=default_page_size,
        max_page_size=max_page_size,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
