"""Database engine and session factory."""

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def _connect_args() -> Dict[str, Any]:
    if settings.DB_STATEMENT_TIMEOUT_MS <= 0:
        return {}
    # Server-side bound on a single search query
    return {"options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"}


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
