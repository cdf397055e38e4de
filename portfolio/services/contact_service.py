"""Contact form intake and the admin message inbox.

Rate limiting happens before this layer (see ``portfolio.core.rate_limit``);
by the time ``submit_contact`` runs the payload has passed schema validation.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.core.errors import NotFoundAppError
from portfolio.db.models import ContactMessage
from portfolio.schemas.contact import ContactRequest
from portfolio.services.persistence import persistence_errors

logger = logging.getLogger(__name__)


def is_honeypot_tripped(payload: ContactRequest) -> bool:
    """Humans never see the honeypot field, so any value marks a bot."""
    return bool(payload.honeypot)


def submit_contact(session: Session, payload: ContactRequest) -> ContactMessage | None:
    """Store a contact submission.

    Returns:
        The stored message, or None when the honeypot was filled in. Bot
        submissions get the same success response as humans, so nothing in
        the reply tells them they were dropped.

    Raises:
        PersistenceAppError: If the message could not be written.
    """
    if is_honeypot_tripped(payload):
        logger.info("contact.honeypot_tripped", extra={"honeypot": payload.honeypot})
        return None

    message = ContactMessage(name=payload.name, email=payload.email, message=payload.message)
    with persistence_errors("contact.create"):
        session.add(message)
        session.flush()

    logger.info(
        "contact.stored",
        extra={
            "message_id": message.id,
            "email": payload.email,
            "message_chars": len(payload.message),
        },
    )
    return message


def list_messages(session: Session, *, read: bool | None = None) -> Sequence[ContactMessage]:
    """Return messages newest first, optionally only read or only unread ones."""
    stmt = select(ContactMessage)
    if read is not None:
        stmt = stmt.where(ContactMessage.read.is_(read))
    return session.scalars(stmt.order_by(ContactMessage.created_at.desc())).all()


def get_message(session: Session, message_id: str) -> ContactMessage:
    message = session.get(ContactMessage, message_id)
    if message is None:
        raise NotFoundAppError(
            code="message_not_found",
            message="Message not found",
            details={"id": message_id},
        )
    return message


def set_read(session: Session, message_id: str, read: bool) -> ContactMessage:
    message = get_message(session, message_id)
    with persistence_errors("contact.mark"):
        message.read = read
        session.flush()
    logger.info("contact.marked", extra={"message_id": message_id, "read": read})
    return message


def delete_message(session: Session, message_id: str) -> None:
    message = get_message(session, message_id)
    with persistence_errors("contact.delete"):
        session.delete(message)
        session.flush()
    logger.info("contact.deleted", extra={"message_id": message_id})
