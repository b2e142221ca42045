from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session
from typing import Optional

from supportdesk.api.deps import get_current_business, get_db, get_storage
from supportdesk.core.backend import ObjectStorage
from supportdesk.core.errors import NotFoundError
from supportdesk.models.business import Business
from supportdesk.schemas.business import BusinessOut, BusinessSearchOut, TicketFormOut
from supportdesk.schemas.ticket import TicketOut, TicketSubmission
from supportdesk.services import catalog, tenants
from supportdesk.services import tickets as ticket_service

router = APIRouter(prefix="/businesses", tags=["businesses"])


def public_business_id(business_id: str) -> int:
    """Ids come from shareable links; anything that is not a number is a stale link."""
    try:
        return int(business_id)
    except ValueError:
        raise NotFoundError("Business not found", redirect_to=tenants.SEARCH_PAGE)


@router.get("/search", response_model=BusinessSearchOut)
def search_businesses(
    q: str = Query("", description="At least 2 characters"),
    seq: Optional[int] = Query(None, description="Echoed back so clients can drop stale responses"),
    limit: Optional[int] = Query(None, ge=1, le=50),
    db: Session = Depends(get_db),
):
    results = tenants.find_businesses_by_name(db, q, limit=limit)
    return {"seq": seq, "query": q, "results": results}


@router.get("/me", response_model=BusinessOut)
def my_business(business: Business = Depends(get_current_business)):
    return business


@router.get("/{business_id}", response_model=TicketFormOut)
def ticket_form(business_id: int = Depends(public_business_id), db: Session = Depends(get_db)):
    """
    Public data for the new-ticket form. Unknown ids answer 404 with
    redirect_to pointing back at the business search.
    """
    business = tenants.get_business(db, business_id)
    return {"business": business, "categories": catalog.form_categories(db, business.id)}


@router.post("/{business_id}/tickets", response_model=TicketOut, status_code=201)
def submit_ticket(
    business_id: int = Depends(public_business_id),
    customer_name: str = Form(""),
    customer_phone: str = Form(""),
    customer_email: Optional[str] = Form(None),
    category: str = Form(""),
    description: str = Form(""),
    attachment: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    """Unauthenticated customer submission (multipart form, optional attachment)."""
    submission = TicketSubmission(
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_email=customer_email,
        category=category,
        description=description,
    )

    upload = None
    if attachment is not None and attachment.filename:
        upload = ticket_service.Attachment(
            filename=attachment.filename,
            content=attachment.file.read(),
            content_type=attachment.content_type or "application/octet-stream",
        )

    return ticket_service.create_ticket(db, storage, business_id, submission, upload)
