from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from supportdesk.api.deps import get_current_business, get_db
from supportdesk.models.business import Business
from supportdesk.schemas.ticket import TicketOut, TicketStatusUpdate
from supportdesk.services import tickets as ticket_service

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("", response_model=List[TicketOut])
def list_tickets(
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
    status: Optional[str] = Query(None),
    day: Optional[date] = Query(None, alias="date", description="YYYY-MM-DD, local calendar day"),
):
    return ticket_service.list_tickets(db, business.id, status=status, day=day)


@router.get("/{ticket_id}", response_model=TicketOut)
def get_ticket(
    ticket_id: int,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    return ticket_service.get_ticket(db, business.id, ticket_id)


@router.patch("/{ticket_id}", response_model=TicketOut)
def update_ticket_status(
    ticket_id: int,
    payload: TicketStatusUpdate,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    return ticket_service.update_ticket_status(db, business.id, ticket_id, payload.status)


@router.delete("/{ticket_id}")
def delete_ticket(
    ticket_id: int,
    confirm: bool = Query(False, description="Must be true; deletion is irreversible"),
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
):
    ticket_service.delete_ticket(db, business.id, ticket_id, confirm=confirm)
    return {"ok": True}
