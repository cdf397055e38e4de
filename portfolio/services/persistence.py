"""Translation of database failures into application errors."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from portfolio.core.errors import ConflictAppError, PersistenceAppError

logger = logging.getLogger(__name__)


@contextmanager
def persistence_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy errors as AppErrors, logging the cause.

    Args:
        operation: Dotted name of the write being attempted (for logs only).

    Raises:
        ConflictAppError: On constraint violations that slipped past pre-checks.
        PersistenceAppError: On any other database failure.
    """
    try:
        yield
    except IntegrityError as exc:
        logger.warning(
            "persistence.integrity_error",
            extra={"operation": operation, "error_msg": str(exc.orig)},
        )
        raise ConflictAppError(
            code="conflict",
            message="The change conflicts with an existing record",
        ) from exc
    except SQLAlchemyError as exc:
        logger.error(
            "persistence.failed",
            extra={"operation": operation, "error_type": type(exc).__name__, "error_msg": str(exc)},
        )
        raise PersistenceAppError(
            code="persistence_error",
            message="Failed to process request",
        ) from exc
