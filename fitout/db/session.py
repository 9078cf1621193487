from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker

from fitout.core.config import settings


def is_sqlite_url(database_url: str) -> bool:
    return database_url.lower().startswith("sqlite")


def build_engine(database_url: str, **overrides: Any) -> Engine:
    """Engine for the inventory database.

    SQLite (local runs and tests) gets a thread-tolerant connection and the
    default pool; networked databases get the pool sized from settings.
    """
    engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if is_sqlite_url(database_url):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout_seconds,
            pool_recycle=settings.db_pool_recycle_seconds,
        )
    engine_kwargs.update(overrides)
    return create_engine(database_url, **engine_kwargs)


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine(settings.database_url)
SessionLocal = build_session_factory(engine)
