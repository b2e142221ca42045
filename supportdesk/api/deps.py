from fastapi import Depends
from sqlalchemy.orm import Session

from supportdesk.core.auth import User, get_current_user
from supportdesk.core.backend import Backend, ObjectStorage, get_backend
from supportdesk.models.business import Business
from supportdesk.services.tenants import get_business_by_owner


def get_db(backend: Backend = Depends(get_backend)):
    db = backend.sessions()
    try:
        yield db
    finally:
        db.close()


def get_storage(backend: Backend = Depends(get_backend)) -> ObjectStorage:
    return backend.storage


def get_current_business(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Business:
    """The signed-in owner's business. Every owner-side query is scoped to it."""
    return get_business_by_owner(db, current_user.id)
