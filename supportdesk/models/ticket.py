from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship

from supportdesk.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)

    # Fixed at creation
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    business = relationship("Business", back_populates="tickets")

    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    customer_email = Column(String, nullable=True)

    # Free text on purpose: no FK to ticket_categories / ticket_statuses
    category = Column(String, nullable=False)
    status = Column(String, nullable=False, default="new", index=True)

    description = Column(Text, nullable=False)
    image_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
