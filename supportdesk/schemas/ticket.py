from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional


class TicketSubmission(BaseModel):
    """What a customer fills in on the public form. Emptiness is checked by the service."""
    customer_name: str = ""
    customer_phone: str = ""
    customer_email: Optional[str] = None
    category: str = ""
    description: str = ""

    @field_validator("customer_name", "customer_phone", "category", "description", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("customer_email", mode="before")
    @classmethod
    def blank_email_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
        return v or None


class TicketStatusUpdate(BaseModel):
    # Any string is accepted; there is no transition table
    status: str


class TicketOut(BaseModel):
    id: int
    business_id: int
    customer_name: str
    customer_phone: str
    customer_email: Optional[str]
    category: str
    description: str
    image_url: Optional[str]
    status: str
    created_at: datetime

    class Config:
        from_attributes = True
