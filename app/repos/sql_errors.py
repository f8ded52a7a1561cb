# app/repos/sql_errors.py
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import StorageFailure
from app.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def storage_errors(db: Session, action: str):
    """Turn driver/ORM errors into StorageFailure, rolling back the session."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error {action}: {e}")
        raise StorageFailure(f"Error {action}", detail=str(e)) from e
