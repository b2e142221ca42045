from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional


class BusinessOut(BaseModel):
    id: int
    owner_id: str
    name: str
    phone: Optional[str]
    email: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class BusinessSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class BusinessSearchOut(BaseModel):
    # Echo of the caller's sequence number so stale responses can be dropped
    seq: Optional[int] = None
    query: str
    results: List[BusinessSummary]


class TicketFormOut(BaseModel):
    """Everything the public new-ticket form needs for one business."""
    business: BusinessSummary
    categories: List[str]
