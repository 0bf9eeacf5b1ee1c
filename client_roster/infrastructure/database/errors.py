"""Translation of SQLAlchemy failures into the domain StoreError."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from client_roster.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def sql_errors(operation: str) -> Iterator[None]:
    """Re-raise any SQLAlchemyError raised inside the block as StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("SQL store error during %s: %s", operation, exc)
        raise StoreError("sql", operation, str(exc)) from exc
