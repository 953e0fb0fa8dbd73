from typing import Any

from pymongo import MongoClient
from pymongo.database import Database

from infrastructure.config import get_settings

_client: MongoClient[Any] | None = None


def get_client() -> MongoClient[Any]:
    """
    Obtiene el cliente de MongoDB (Singleton).
    """
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongo_uri, tz_aware=True)
    return _client


def get_db() -> Database[Any]:
    return get_client()[get_settings().mongo_db_name]
