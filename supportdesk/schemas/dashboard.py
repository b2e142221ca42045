from pydantic import BaseModel
from typing import List, Optional

from supportdesk.schemas.business import BusinessSummary
from supportdesk.schemas.catalog import StatusOut
from supportdesk.schemas.ticket import TicketOut


class StatusView(BaseModel):
    name: str
    description: str
    color: str
    known: bool


class StatusCount(BaseModel):
    name: str
    count: int
    color: str
    known: bool


class DashboardTicket(TicketOut):
    status_view: StatusView


class DashboardOut(BaseModel):
    business: BusinessSummary
    statuses: List[StatusOut]
    counts: List[StatusCount]
    total: int
    tickets: List[DashboardTicket]


class NavigationOut(BaseModel):
    page: str
    redirect_to: Optional[str] = None
    business_id: Optional[int] = None
