import logging
import os
import time
import uuid
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from supportdesk.core.backend import ObjectStorage
from supportdesk.core.config import settings
from supportdesk.core.database import remote_operation
from supportdesk.core.errors import NotFoundError, RemoteOperationError, ValidationError
from supportdesk.models.ticket import Ticket
from supportdesk.schemas.ticket import TicketSubmission
from supportdesk.services.catalog import DEFAULT_TICKET_STATUS
from supportdesk.services.dashboard import filter_tickets
from supportdesk.services.tenants import get_business

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "customer_name": "name",
    "customer_phone": "phone",
    "description": "description",
}


@dataclass
class Attachment:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@lru_cache
def local_timezone() -> ZoneInfo:
    return ZoneInfo(settings.LOCAL_TIMEZONE)


def validate_submission(submission: TicketSubmission) -> None:
    missing = [label for field, label in REQUIRED_FIELDS.items() if not getattr(submission, field)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def attachment_key(filename: str) -> str:
    """Storage key that never depends on the user's filename beyond its extension."""
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if not ext.isalnum():
        ext = "bin"
    return f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}.{ext}"


def create_ticket(
    db: Session,
    storage: ObjectStorage,
    business_id: int,
    submission: TicketSubmission,
    attachment: Optional[Attachment] = None,
) -> Ticket:
    """
    Validate, store the attachment (if any), then insert the ticket.

    Upload and insert are separate writes. If the upload fails nothing is
    inserted. If the insert fails after a successful upload the stored object
    is left behind; its key is logged.
    """
    validate_submission(submission)
    get_business(db, business_id)

    image_url = None
    key = None
    if attachment is not None:
        key = attachment_key(attachment.filename)
        storage.upload(key, attachment.content, attachment.content_type)
        image_url = storage.public_url(key)

    ticket = Ticket(
        business_id=business_id,
        customer_name=submission.customer_name,
        customer_phone=submission.customer_phone,
        customer_email=submission.customer_email,
        category=submission.category or settings.DEFAULT_CATEGORY,
        description=submission.description,
        image_url=image_url,
        status=DEFAULT_TICKET_STATUS,
    )
    try:
        with remote_operation(db, "save ticket"):
            db.add(ticket)
            db.commit()
            db.refresh(ticket)
    except RemoteOperationError:
        if key:
            logger.warning("Attachment %s was uploaded but its ticket was not saved", key)
        raise

    logger.info("Ticket %s created for business %s", ticket.id, business_id)
    return ticket


def list_tickets(
    db: Session,
    business_id: int,
    status: Optional[str] = None,
    day: Optional[date] = None,
) -> List[Ticket]:
    """Newest first. Filters run over the fetched list, same as the dashboard."""
    with remote_operation(db, "load tickets"):
        tickets = (
            db.query(Ticket)
            .filter(Ticket.business_id == business_id)
            .order_by(Ticket.created_at.desc(), Ticket.id.desc())
            .all()
        )
    return filter_tickets(tickets, status=status, day=day, tz=local_timezone())


def get_ticket(db: Session, business_id: int, ticket_id: int) -> Ticket:
    with remote_operation(db, "load ticket"):
        ticket = (
            db.query(Ticket)
            .filter(Ticket.id == ticket_id, Ticket.business_id == business_id)
            .first()
        )
    if not ticket:
        raise NotFoundError("Ticket not found")
    return ticket


def update_ticket_status(db: Session, business_id: int, ticket_id: int, status: str) -> Ticket:
    # Any string is accepted, from any status
    ticket = get_ticket(db, business_id, ticket_id)
    with remote_operation(db, "update ticket"):
        ticket.status = status
        db.commit()
        db.refresh(ticket)
    logger.info("Ticket %s status set to %r", ticket_id, status)
    return ticket


def delete_ticket(db: Session, business_id: int, ticket_id: int, confirm: bool = False) -> None:
    if not confirm:
        raise ValidationError("Ticket deletion must be confirmed")
    ticket = get_ticket(db, business_id, ticket_id)
    with remote_operation(db, "delete ticket"):
        db.delete(ticket)
        db.commit()
    logger.info("Ticket %s deleted from business %s", ticket_id, business_id)
