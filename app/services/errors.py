"""Translation of store failures into the domain error taxonomy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from app.core.logging import db_logger
from app.domain.errors import StoreUnavailable


@contextmanager
def store_read(operation: str, **context) -> Iterator[None]:
    """Run a store read; a SQLAlchemy failure becomes ``StoreUnavailable``."""
    try:
        yield
    except SQLAlchemyError as exc:
        db_logger.error("Store read failed", exc=exc, operation=operation, **context)
        raise StoreUnavailable("Database query failure", details={"operation": operation}) from exc
