from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio.db.session import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db_session)) -> dict:
    """Liveness check for load balancers.

    Returns ``status: ok`` whenever the process is serving requests; the
    ``database`` field reports whether a trivial query succeeded.
    """
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        logger.warning("health.database_unavailable", extra={"error_type": type(exc).__name__})
        database = "unavailable"

    return {"status": "ok", "database": database}
