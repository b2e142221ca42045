"""
SQLAlchemy models. Importing this package registers every table on Base.metadata.
"""
from supportdesk.models.ticket import Ticket
from supportdesk.models.business import Business
from supportdesk.models.category import TicketCategory
from supportdesk.models.status import TicketStatus

__all__ = [
    "Business",
    "Ticket",
    "TicketCategory",
    "TicketStatus",
]

# Import Base for Alembic
from supportdesk.core.database import Base
