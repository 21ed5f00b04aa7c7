"""FastAPI dependency injection configuration."""

from typing import Generator

from sqlmodel import Session as DBSession
from sqlmodel import SQLModel, create_engine
from therapy_common.logging import setup_logging

from session_api.config import load_config
from session_api.repositories import SessionRepository

logger = setup_logging()

_config = load_config()
_connect_args = (
    {"check_same_thread": False} if _config.database.url.startswith("sqlite") else {}
)
_engine = create_engine(_config.database.url, connect_args=_connect_args)

if _config.create_tables:
    SQLModel.metadata.create_all(_engine)
    logger.info("Database tables created", extra={"host": _config.database.host})


def get_db_session() -> Generator[DBSession, None, None]:
    """Yields a database session, ensuring proper cleanup."""
    with DBSession(_engine) as session:
        yield session


def get_session_repository(
    db_session: DBSession,
) -> SessionRepository:
    """Creates a SessionRepository with the provided database session."""
    return SessionRepository(db_session)
