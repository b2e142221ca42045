from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship

from supportdesk.core.database import Base
from supportdesk.models.ticket import utcnow


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True, index=True)

    # Supabase auth user id; one business per owner
    owner_id = Column(String, nullable=False, unique=True, index=True)

    name = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)

    # No cascades: businesses are never deleted, and removing a category or
    # status must not touch tickets that still carry its name
    tickets = relationship("Ticket", back_populates="business")
    categories = relationship("TicketCategory", back_populates="business")
    statuses = relationship("TicketStatus", back_populates="business")

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
