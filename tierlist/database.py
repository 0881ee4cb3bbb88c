"""Database configuration, session management and the unit-of-work boundary."""

import logging
from collections.abc import Callable, Generator
from typing import Any, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from tierlist.config import get_settings
from tierlist.domain.result import Result, save_data

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=10,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()

T = TypeVar("T")


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_in_transaction(db: Session, operation: Callable[[], Result[T]]) -> Result[T]:
    """Run ``operation`` as a single unit of work.

    The operation mutates objects attached to ``db`` and reports its outcome as
    a Result. A failure result rolls every change back; a success result is
    committed. Database errors raised by the operation or by the commit roll
    back and are reported as ``SaveDataError`` so a half-applied change is
    never persisted.
    """
    try:
        result = operation()
        if result.is_failure:
            _rollback(db)
            return result
        db.commit()
    except SQLAlchemyError as e:
        logger.exception(f"Transaction failed, rolling back: {e}")
        _rollback(db)
        return Result.failure(save_data("An error occurred while saving changes."))
    return result


def _rollback(db: Session) -> None:
    try:
        db.rollback()
    except SQLAlchemyError:
        logger.exception("Rollback failed")
