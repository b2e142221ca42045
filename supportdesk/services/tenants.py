"""
Tenant directory: owner identity <-> business, plus the public business search.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from supportdesk.core.auth import AuthSession
from supportdesk.core.backend import IdentityProvider
from supportdesk.core.config import settings
from supportdesk.core.database import remote_operation
from supportdesk.core.errors import NotFoundError, RemoteOperationError, ValidationError
from supportdesk.models.business import Business

logger = logging.getLogger(__name__)

SEARCH_PAGE = "/ticket"


def get_business(db: Session, business_id: int) -> Business:
    with remote_operation(db, "load business"):
        business = db.query(Business).filter(Business.id == business_id).first()
    if not business:
        raise NotFoundError("Business not found", redirect_to=SEARCH_PAGE)
    return business


def get_business_by_owner(db: Session, owner_id: str) -> Business:
    with remote_operation(db, "load business"):
        business = db.query(Business).filter(Business.owner_id == owner_id).first()
    if not business:
        # Sign-up did not finish: the identity exists but its business row doesn't
        raise NotFoundError("No business is registered for this account")
    return business


def create_business(
    db: Session,
    owner_id: str,
    name: str,
    phone: Optional[str] = None,
    email: Optional[str] = None,
) -> Business:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Business name is required")

    with remote_operation(db, "create business"):
        if db.query(Business).filter(Business.owner_id == owner_id).first():
            raise ValidationError("This account already has a business")
        business = Business(
            owner_id=owner_id,
            name=name,
            phone=(phone or "").strip() or None,
            email=(email or "").strip() or None,
        )
        db.add(business)
        db.commit()
        db.refresh(business)

    logger.info("Business %s created for owner %s", business.id, owner_id)
    return business


def register_owner(
    db: Session,
    identity: IdentityProvider,
    email: str,
    password: str,
    business_name: str,
    phone: Optional[str] = None,
    contact_email: Optional[str] = None,
) -> Tuple[AuthSession, Business]:
    """
    Sign up an owner and create their business, in that order.

    The two writes are not transactional. If the business insert fails the
    identity is left without a business; get_business_by_owner will then
    raise NotFoundError for it. This is logged, not repaired.
    """
    if not (business_name or "").strip():
        raise ValidationError("Business name is required")
    if not email or not password:
        raise ValidationError("Email and password are required")

    session = identity.sign_up(email, password)
    try:
        business = create_business(db, session.user.id, business_name, phone, contact_email)
    except RemoteOperationError as e:
        logger.error("Identity %s was created but its business was not (orphaned account)", session.user.id)
        raise RemoteOperationError("Account was created but the business could not be saved") from e
    return session, business


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def find_businesses_by_name(db: Session, query: str, limit: Optional[int] = None) -> List[Business]:
    """Case-insensitive substring match on business name; short queries return nothing."""
    query = (query or "").strip()
    if len(query) < settings.BUSINESS_SEARCH_MIN_LENGTH:
        return []

    like = f"%{_escape_like(query)}%"
    with remote_operation(db, "search businesses"):
        return (
            db.query(Business)
            .filter(Business.name.ilike(like, escape="\\"))
            .order_by(Business.name.asc(), Business.id.asc())
            .limit(limit or settings.BUSINESS_SEARCH_LIMIT)
            .all()
        )
