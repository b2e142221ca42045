from sqlalchemy import Column, String, Integer, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from supportdesk.core.database import Base
from supportdesk.models.ticket import utcnow


class TicketStatus(Base):
    """A business-defined status. Built-in statuses live in code, not here."""
    __tablename__ = "ticket_statuses"

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    business = relationship("Business", back_populates="statuses")

    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    color = Column(String, nullable=False, default="gray")  # gray/red/yellow/green/blue/purple/pink
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
