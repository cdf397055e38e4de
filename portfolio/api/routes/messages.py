from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from portfolio.core.auth import require_admin
from portfolio.db.session import get_db_session
from portfolio.schemas.common import SuccessResponse
from portfolio.schemas.contact import ContactMessageRead, ContactMessageUpdate
from portfolio.services import contact_service

# The whole inbox is admin-only, reads included.
router = APIRouter(
    prefix="/contact-messages",
    tags=["Messages"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[ContactMessageRead])
def list_messages(
    read: bool | None = Query(None, description="Filter by read flag; omit for all messages."),
    db: Session = Depends(get_db_session),
) -> list[ContactMessageRead]:
    messages = contact_service.list_messages(db, read=read)
    return [ContactMessageRead.model_validate(m) for m in messages]


@router.patch("/{message_id}", response_model=ContactMessageRead)
def update_message(
    message_id: str,
    payload: ContactMessageUpdate,
    db: Session = Depends(get_db_session),
) -> ContactMessageRead:
    """Mark a message read or unread. No other field can change."""
    return ContactMessageRead.model_validate(contact_service.set_read(db, message_id, payload.read))


@router.delete("/{message_id}", response_model=SuccessResponse)
def delete_message(message_id: str, db: Session = Depends(get_db_session)) -> SuccessResponse:
    contact_service.delete_message(db, message_id)
    return SuccessResponse()
