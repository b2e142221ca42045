"""
Per-business ticket categories and statuses.

Built-in statuses are never stored. ``list_statuses`` always returns them
first, in BUILTIN_STATUSES order, followed by the business's own statuses
in creation order. Names are not deduplicated: a custom status called
"new" appears alongside the built-in one.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from supportdesk.core.config import settings
from supportdesk.core.database import remote_operation
from supportdesk.core.errors import NotFoundError, ValidationError
from supportdesk.models.category import TicketCategory
from supportdesk.models.status import TicketStatus

logger = logging.getLogger(__name__)

COLOR_TOKENS = ("gray", "red", "yellow", "green", "blue", "purple", "pink")
FALLBACK_COLOR = "gray"
DEFAULT_STATUS_DESCRIPTION = "Custom status"


@dataclass(frozen=True)
class BuiltinStatus:
    name: str
    description: str
    color: str
    builtin: bool = True
    id: Optional[int] = None
    business_id: Optional[int] = None
    created_at: Optional[datetime] = None


BUILTIN_STATUSES = (
    BuiltinStatus("new", "Ticket received", "red"),
    BuiltinStatus("in-progress", "Being handled", "yellow"),
    BuiltinStatus("closed", "Handled and closed", "green"),
)

DEFAULT_TICKET_STATUS = BUILTIN_STATUSES[0].name

StatusDefinition = Union[BuiltinStatus, TicketStatus]


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

def list_categories(db: Session, business_id: int) -> List[TicketCategory]:
    with remote_operation(db, "load categories"):
        return (
            db.query(TicketCategory)
            .filter(TicketCategory.business_id == business_id)
            .filter(TicketCategory.is_active.is_(True))
            .order_by(TicketCategory.created_at.asc(), TicketCategory.id.asc())
            .all()
        )


def form_categories(db: Session, business_id: int) -> List[str]:
    """Category names offered to customers; the generic one when none are configured."""
    names = [c.name for c in list_categories(db, business_id)]
    return names or [settings.DEFAULT_CATEGORY]


def add_category(db: Session, business_id: int, name: str) -> TicketCategory:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Category name is required")

    category = TicketCategory(business_id=business_id, name=name)
    with remote_operation(db, "add category"):
        db.add(category)
        db.commit()
        db.refresh(category)
    return category


def remove_category(db: Session, business_id: int, category_id: int) -> None:
    """Hard delete. Tickets keep whatever category text they were filed with."""
    with remote_operation(db, "remove category"):
        category = (
            db.query(TicketCategory)
            .filter(TicketCategory.id == category_id, TicketCategory.business_id == business_id)
            .first()
        )
        if not category:
            raise NotFoundError("Category not found")
        db.delete(category)
        db.commit()
    logger.info("Category %s removed from business %s", category_id, business_id)


# ---------------------------------------------------------------------------
# Statuses
# ---------------------------------------------------------------------------

def list_custom_statuses(db: Session, business_id: int) -> List[TicketStatus]:
    with remote_operation(db, "load statuses"):
        return (
            db.query(TicketStatus)
            .filter(TicketStatus.business_id == business_id)
            .filter(TicketStatus.is_active.is_(True))
            .order_by(TicketStatus.created_at.asc(), TicketStatus.id.asc())
            .all()
        )


def merge_statuses(custom: List[TicketStatus]) -> List[StatusDefinition]:
    return list(BUILTIN_STATUSES) + list(custom)


def list_statuses(db: Session, business_id: int) -> List[StatusDefinition]:
    return merge_statuses(list_custom_statuses(db, business_id))


def normalize_color(color: Optional[str]) -> str:
    color = (color or "").strip().lower()
    return color if color in COLOR_TOKENS else FALLBACK_COLOR


def add_status(
    db: Session,
    business_id: int,
    name: str,
    description: Optional[str] = None,
    color: Optional[str] = None,
) -> TicketStatus:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Status name is required")

    status = TicketStatus(
        business_id=business_id,
        name=name,
        description=(description or "").strip() or DEFAULT_STATUS_DESCRIPTION,
        color=normalize_color(color),
    )
    with remote_operation(db, "add status"):
        db.add(status)
        db.commit()
        db.refresh(status)
    return status


def remove_status(db: Session, business_id: int, status_id: int) -> None:
    """Hard delete. Tickets carrying this status keep it and render with the fallback style."""
    with remote_operation(db, "remove status"):
        status = (
            db.query(TicketStatus)
            .filter(TicketStatus.id == status_id, TicketStatus.business_id == business_id)
            .first()
        )
        if not status:
            raise NotFoundError("Status not found")
        db.delete(status)
        db.commit()
    logger.info("Status %s removed from business %s", status_id, business_id)
