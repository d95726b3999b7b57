"""SQLAlchemy engine and session factory for the credential store."""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from chatpay.common.config import settings


def engine_options(dsn: str) -> dict[str, Any]:
    """Connection options per backend.

    Credential reads run in the threadpool, so SQLite connections must be
    shareable across threads.
    """

    if dsn.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": settings.db_pool_size}


engine = create_engine(settings.postgres_dsn, **engine_options(settings.postgres_dsn))
# Read-only sessions; rows are copied into plain records before the session closes.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""

    pass
