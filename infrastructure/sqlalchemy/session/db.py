from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from infrastructure.config import get_settings


class Base(DeclarativeBase):
    pass


def build_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(get_settings().database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_session() -> Session:
    return SessionLocal()


def init_db(bind=None) -> None:
    # Importar los modelos registra sus tablas en Base.metadata
    from infrastructure.sqlalchemy.model import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
