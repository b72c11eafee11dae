"""Engine, session factory and declarative base."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from tunein_stage.core.settings import settings


class Base(DeclarativeBase):
    """Base class for the club, post, vote and profile tables."""


# Models register themselves on Base.metadata at import time.
import tunein_stage.models  # noqa: E402,F401


def _connect_args(url: str) -> dict[str, object]:
    # SQLite connections are shared with the threadpool that runs sync dependencies.
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


engine = create_engine(
    settings.effective_database_url,
    pool_pre_ping=True,
    echo=settings.sql_debug,
    connect_args=_connect_args(settings.effective_database_url),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; services decide when to commit."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create every table known to ``Base.metadata`` (local SQLite setups)."""
    Base.metadata.create_all(bind=engine)

