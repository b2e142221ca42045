import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from supportdesk.api.deps import get_db
from supportdesk.core.auth import User, get_access_token, get_current_user
from supportdesk.core.backend import Backend, get_backend
from supportdesk.core.errors import NotFoundError
from supportdesk.schemas.auth import Credentials, SessionOut, SignUpRequest
from supportdesk.services import tenants

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SessionOut, status_code=201)
def sign_up(
    payload: SignUpRequest,
    db: Session = Depends(get_db),
    backend: Backend = Depends(get_backend),
):
    session, business = tenants.register_owner(
        db,
        backend.identity,
        payload.email,
        payload.password,
        payload.business_name,
        phone=payload.phone,
        contact_email=payload.contact_email,
    )
    logger.info("Owner %s signed up with business %s", session.user.id, business.id)
    return {"user": session.user, "access_token": session.access_token, "business": business}


@router.post("/login", response_model=SessionOut)
def sign_in(
    payload: Credentials,
    db: Session = Depends(get_db),
    backend: Backend = Depends(get_backend),
):
    session = backend.identity.sign_in(payload.email, payload.password)
    try:
        business = tenants.get_business_by_owner(db, session.user.id)
    except NotFoundError:
        # Orphaned sign-up; the session is still valid
        logger.warning("Owner %s signed in without a business", session.user.id)
        business = None
    return {"user": session.user, "access_token": session.access_token, "business": business}


@router.post("/logout")
def sign_out(
    token: str = Depends(get_access_token),
    backend: Backend = Depends(get_backend),
):
    backend.identity.sign_out(token)
    return {"ok": True}


@router.get("/session", response_model=SessionOut)
def current_session(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        business = tenants.get_business_by_owner(db, current_user.id)
    except NotFoundError:
        business = None
    return {"user": current_user, "business": business}
