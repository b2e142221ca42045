from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from supportdesk.api.deps import get_current_business, get_db
from supportdesk.models.business import Business
from supportdesk.schemas.dashboard import DashboardOut
from supportdesk.schemas.ticket import TicketOut
from supportdesk.services import catalog, dashboard
from supportdesk.services import tickets as ticket_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
def get_dashboard(
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business),
    status: Optional[str] = Query(None),
    day: Optional[date] = Query(None, alias="date"),
):
    """
    Counts are over every ticket of the business; ``tickets`` is the
    filtered list, newest first, each with its resolved status style.
    """
    statuses = catalog.list_statuses(db, business.id)
    all_tickets = ticket_service.list_tickets(db, business.id)
    visible = dashboard.filter_tickets(
        all_tickets, status=status, day=day, tz=ticket_service.local_timezone()
    )

    return {
        "business": business,
        "statuses": statuses,
        "counts": [asdict(c) for c in dashboard.status_counts(all_tickets, statuses)],
        "total": len(all_tickets),
        "tickets": [
            {
                **TicketOut.model_validate(t).model_dump(),
                "status_view": asdict(dashboard.resolve_status(t.status, statuses)),
            }
            for t in visible
        ],
    }
