from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portfolio.core.rate_limit import enforce_contact_rate_limit
from portfolio.db.session import get_db_session
from portfolio.schemas.common import SuccessResponse
from portfolio.schemas.contact import ContactRequest
from portfolio.services import contact_service

router = APIRouter(tags=["Contact"])


@router.post(
    "/contact",
    response_model=SuccessResponse,
    dependencies=[Depends(enforce_contact_rate_limit)],
)
def submit_contact(
    payload: ContactRequest,
    db: Session = Depends(get_db_session),
) -> SuccessResponse:
    """Accept a message from the public contact form.

    The per-client rate limit is charged before the body is validated, so
    submissions failing schema validation still count against the budget
    (unparseable JSON is rejected earlier and does not). Submissions with a
    filled-in honeypot get the same success reply but are not stored.

    Raises:
        RateLimitAppError: 429 when the client exceeded its budget.
        PersistenceAppError: 500 when the message could not be stored.
    """
    contact_service.submit_contact(db, payload)
    return SuccessResponse()
