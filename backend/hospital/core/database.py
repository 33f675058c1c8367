"""
Database configuration.
Engine construction and SQLModel session management.

The engine is built by the composition root (``main.py``) and stored on
``app.state.engine``; nothing here opens a connection at import time.
"""
from contextlib import contextmanager
from typing import Generator, Iterator, Optional
import logging

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session

from hospital.config import settings
from hospital.core.exceptions import BaseAppException, InternalError

logger = logging.getLogger("hms.database")


def build_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Creates an engine configured for the database type.
    
    Args:
        database_url: SQLAlchemy URL (defaults to settings.DATABASE_URL)
        echo: Log SQL statements (defaults to settings.DEBUG)
    
    Returns:
        SQLAlchemy engine
    """
    url = database_url or settings.DATABASE_URL
    connect_args = {}
    if "sqlite" in url:
        connect_args["check_same_thread"] = False
    
    return create_engine(
        url,
        echo=settings.DEBUG if echo is None else echo,
        connect_args=connect_args
    )


def create_db_and_tables(engine: Engine) -> None:
    """
    Creates every table registered in the SQLModel metadata.
    Called on application startup.
    """
    # Register table models on the metadata
    import hospital.models  # noqa: F401
    
    SQLModel.metadata.create_all(engine)


def get_session(request: Request) -> Generator[Session, None, None]:
    """
    Session generator for FastAPI dependency injection.
    
    Usage:
        @router.get("/endpoint")
        def endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session


def check_database_health(engine: Engine) -> bool:
    """Returns True when the database answers a trivial query."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


@contextmanager
def transaction(session: Session, operation: str) -> Iterator[Session]:
    """
    Commits the work done inside the block, or rolls all of it back.
    
    Application exceptions are re-raised untouched; store failures become
    ``InternalError``.
    
    Args:
        session: Active session
        operation: Short description used in the error message
    """
    try:
        yield session
        session.commit()
    except BaseAppException:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error while trying to {operation}: {e}")
        raise InternalError(f"Could not {operation}") from e
